# dishcart/utils/slugs.py
from slugify import slugify as _slugify


def slugify(name: str) -> str:
    #"Pizzeria Roma" -> "pizzeria-roma"
    return _slugify(name or "", lowercase=True)
