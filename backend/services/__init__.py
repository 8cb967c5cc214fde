"""
Services around the game core: clocks, the session lifecycle, renderers,
displays and the pygame window.
"""
