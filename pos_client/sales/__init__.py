"""
Sale entry: cart, checkout and receipts.
"""
