"""
Vid2Blog Application.

Turns the time-stamped transcript of a YouTube video into a structured blog
article: the transcript is cleaned, analyzed for topics and key points, and
rendered through an article template or, optionally, a language model.
"""

from vid2blog.config import config

__version__ = config.APP_VERSION
