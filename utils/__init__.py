"""
Utilities: input tokenizer.
"""
