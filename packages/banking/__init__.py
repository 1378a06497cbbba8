"""
Banking package - linking bank institutions and syncing their transactions.
"""
