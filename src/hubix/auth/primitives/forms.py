"""Queries against the login page rendered by the hubIC authorization endpoint.

The page always carries exactly one form and exactly one hidden ``oauth``
input. Anything else means the server contract changed, so both lookups fail
instead of guessing.
"""

from __future__ import annotations

from bs4 import BeautifulSoup

from hubix.auth.models.errors import ShapeError
from hubix.auth.models.result import Err, Ok, Result


def parse_document(html: str | bytes) -> BeautifulSoup:
    return BeautifulSoup(html, "html.parser")


def find_single_form(doc: BeautifulSoup) -> Result[str]:
    """Return the ``action`` attribute of the only ``<form>`` in the document."""
    forms = doc.find_all("form")
    if len(forms) != 1:
        return Err(ShapeError(f"expected exactly one <form>, found {len(forms)}"))

    action = forms[0].get("action")
    if action is None:
        return Err(ShapeError("<form> has no action attribute"))
    return Ok(action)


def find_single_named_input(doc: BeautifulSoup, name: str) -> Result[str]:
    """Return the ``value`` attribute of the only ``<input name=...>``."""
    inputs = doc.find_all("input", attrs={"name": name})
    if len(inputs) != 1:
        return Err(
            ShapeError(
                f'expected exactly one <input name="{name}">, found {len(inputs)}'
            )
        )

    value = inputs[0].get("value")
    if value is None:
        return Err(ShapeError(f'<input name="{name}"> has no value attribute'))
    return Ok(value)
