"""Accumulates archived page links and renders the listing page."""
from __future__ import annotations

from typing import List

from jinja2 import Environment, select_autoescape

INDEX_TEMPLATE = """<!DOCTYPE html>
<html>
  <head>
    <meta charset="UTF-8">
    <title>{{ title }}</title>
    <meta name="viewport" content="width=device-width, initial-scale=1">
    <link rel="stylesheet" href="https://maxcdn.bootstrapcdn.com/bootstrap/3.4.1/css/bootstrap.min.css">
  </head>
  <body>
    <div class="container">
      <h1>{{ title }}</h1>
      <ul>
      {%- for link in links %}
        <li><a href="{{ link }}">{{ link }}</a></li>
      {%- endfor %}
      </ul>
    </div>
  </body>
</html>
"""

_environment = Environment(autoescape=select_autoescape(default=True, default_for_string=True))


class IndexAccumulator:
    """Ordered, append-only list of links rendered once into an HTML listing."""

    def __init__(self, template: str = INDEX_TEMPLATE) -> None:
        self._template = _environment.from_string(template)
        self._links: List[str] = []
        self.rendered = False

    def append(self, link: str) -> None:
        if self.rendered:
            raise RuntimeError("index already rendered")
        self._links.append(link)

    @property
    def links(self) -> List[str]:
        return list(self._links)

    def __len__(self) -> int:
        return len(self._links)

    def render(self, title: str) -> bytes:
        if self.rendered:
            raise RuntimeError("index already rendered")
        self.rendered = True
        return self._template.render(title=title, links=self._links).encode("utf-8")
