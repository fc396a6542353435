"""Bulletproofs+ generators and the weighted inner-product argument."""