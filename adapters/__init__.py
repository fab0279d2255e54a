"""
Front-end adapters for the command grammar engine.
"""
