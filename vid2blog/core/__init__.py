"""
Core functionality for the Vid2Blog application.

This package contains modules for cleaning and segmenting transcripts,
analyzing their content, and generating articles from the analysis.
"""
