"""
Application configuration loading.
"""
