"""
plugins/word_wrap_plugin/config.py
Default configuration for the Word Wrap plugin.
"""

DEFAULT_CONFIG = {
    # "break-word" moves whole words to the next line.
    # "break-all" has no word lookahead and wraps per character.
    # Anything else uses the strict per-character check.
    "word_wrap_style": "break-word",
}
