"""
Services layer for Genie Patcher.
Handles code decoding and ROM image patching.
"""
