from genericcov.render.human import render_human
from genericcov.render.json import format_json, render_json

__all__ = ["format_json", "render_human", "render_json"]
