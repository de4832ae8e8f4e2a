"""
Renders the mustache templates packaged with the form generator
"""

import warnings
from pathlib import Path
from typing import Any, Dict, cast

with warnings.catch_warnings():
    # chevron's renderer module can emit a SyntaxWarning when imported
    warnings.simplefilter("ignore")
    from chevron import renderer

TEMPLATES_DIR = Path(__file__).parent / "templates"

# JSX and GraphQL documents are full of braces, the templates use <% %> as tag delimiters
LEFT_DELIMITER = "<%"
RIGHT_DELIMITER = "%>"


def render_template(template_name: str, data: Dict[str, Any]) -> str:
    """
    Renders templates/<template_name> with the given data. Values are HTML escaped unless the template
    reads them with <%& %>.
    """
    template = (TEMPLATES_DIR / template_name).read_text(encoding="utf-8")
    return cast(str, renderer.render(template, data, def_ldel=LEFT_DELIMITER, def_rdel=RIGHT_DELIMITER))
