"""Bulletproofs(+) building blocks: vectors, generators and batch verification."""