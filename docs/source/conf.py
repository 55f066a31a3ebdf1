"""Project-level Sphinx configuration for the structconf documentation site."""
# pylint: disable=invalid-name

# Configuration file for the Sphinx documentation builder.
#
# For the full list of built-in configuration values, see the documentation:
# https://www.sphinx-doc.org/en/master/usage/configuration.html

import sys
from pathlib import Path

# -- Path setup --------------------------------------------------------------
# Add the project root to sys.path for autodoc
sys.path.insert(0, str(Path(__file__).parent.parent.parent / "src"))

from structconf.meta import (  # noqa: E402  # pylint: disable=wrong-import-position
    __app_name__,
    __version__,
)

# -- Project information -----------------------------------------------------

project = __app_name__
release = __version__
version = __version__

# -- General configuration ---------------------------------------------------

extensions = [
    "sphinx.ext.autodoc",  # Auto-generate docs from docstrings
    "sphinx.ext.napoleon",  # Support for Google-style docstrings
    "sphinx.ext.viewcode",  # Add [source] links to documentation
    "sphinx.ext.intersphinx",  # Link to the Python and Click documentation
]

# Napoleon settings (for Google-style docstrings)
napoleon_google_docstring = True
napoleon_numpy_docstring = False
napoleon_include_init_with_doc = True
napoleon_use_admonition_for_examples = True
napoleon_use_ivar = False
napoleon_attr_annotations = True

autodoc_default_options = {
    "members": True,
    "undoc-members": False,
    "show-inheritance": True,
}
autodoc_typehints = "description"

intersphinx_mapping = {
    "python": ("https://docs.python.org/3", None),
    "click": ("https://click.palletsprojects.com/en/stable/", None),
}

templates_path = ["_templates"]
exclude_patterns: list[str] = []

# -- Options for HTML output -------------------------------------------------

html_theme = "alabaster"
html_title = f"{project} {release}"
