"""
HelpDesk - support ticketing API backed by Supabase
"""
__version__ = "1.0.0"
