from importlib import resources
from string import Template


def load_theme_template(name: str = "dark_theme") -> Template:
    with resources.files(__package__).joinpath(f"data/{name}.css").open("r", encoding="utf-8") as fh:
        return Template(fh.read())
