"""
Label Translator: bulk re-import of translated metadata labels.
"""
__version__ = "0.3.0"
