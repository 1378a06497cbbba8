"""
Receipts package - merchant lookup for scanned receipts.
"""
