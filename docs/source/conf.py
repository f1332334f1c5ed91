from __future__ import annotations
import sys
from pathlib import Path
from importlib.metadata import version as pkg_version, PackageNotFoundError

# --- Make the package importable (src-layout) ---
ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "src"))

# --- Project info ---
project = "TWTSField"
author = "TWTSField developers"
try:
    release = pkg_version("twtsfield")
    version = ".".join(release.split(".")[:2])
except PackageNotFoundError:
    release = version = "0.1.0"

# --- Extensions ---
extensions = [
    "sphinx.ext.autodoc",
    "sphinx.ext.autosummary",
    "sphinx.ext.napoleon",      # NumPy docstrings
    "sphinx.ext.mathjax",       # field formulas in the docstrings
    "sphinx.ext.viewcode",
    "myst_parser",
]

autosummary_generate = True

autodoc_default_options = {
    "members": True,
    "undoc-members": False,
    "show-inheritance": True,
}
autodoc_typehints = "description"
autodoc_class_signature = "separated"
autodoc_preserve_defaults = True

napoleon_google_docstring = False
napoleon_numpy_docstring = True
napoleon_use_param = True
napoleon_use_rtype = True

# Theme
html_theme = "furo"

templates_path = ["_templates"]
exclude_patterns = ["_build"]
html_static_path = ["_static"]
