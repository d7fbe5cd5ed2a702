"""monoview - live preview of single-channel camera frames.

Fills a fixed-size monochrome buffer every iteration (synthetic noise, or
bytes from a camera SDK), wraps it zero-copy as a 2D image, shows it in an
OpenCV window and prints ``FPS: <n>`` once per second.
"""

__version__ = "0.1.0"
