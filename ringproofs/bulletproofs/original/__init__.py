"""The original Bulletproofs aggregate range proof and its inner-product argument."""