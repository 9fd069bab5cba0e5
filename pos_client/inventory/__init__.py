"""
Product catalog: products, variants and the category hierarchy.
"""
