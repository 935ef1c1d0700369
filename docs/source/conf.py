import os
import sys
sys.path.insert(0, os.path.abspath('../../src'))

from paperhome import __version__  # noqa: E402

project = 'PaperHome'
copyright = '2026, PaperHome Team'
author = 'PaperHome Team'
release = __version__

extensions = [
    'sphinx.ext.autodoc',
    'sphinx.ext.napoleon',
    'sphinx.ext.viewcode',
]

autodoc_member_order = 'bysource'
autodoc_mock_imports = ['pymupdf', 'docx', 'openai']

templates_path = ['_templates']
exclude_patterns = []

html_theme = 'sphinx_rtd_theme'
html_static_path = []
