"""
Pharmacy product admin client.
"""
