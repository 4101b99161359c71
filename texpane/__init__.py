"""
TEXPANE - TeX EXport Preview And Notification Environment

Keeps a compiled PDF preview of a LaTeX document next to its source, refreshing
it on every save and highlighting the source lines the compiler complains about.

Architecture:
- Layout Context: In-memory host model (surfaces, regions, window groups) and preview pane location
- Documents Context: Resolution of the document to compile (active file, master file, prompt)
- Rendering Context: Compiler invocation, log scraping, and result resolution
- Preview Context: The save-triggered compile-and-refresh session
"""

__version__ = "0.1.0"
