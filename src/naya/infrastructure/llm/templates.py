"""Persona template loading."""

from jinja2 import Environment, PackageLoader, StrictUndefined, Template

PERSONA_TEMPLATE = "persona.j2"


def create_jinja_env() -> Environment:
    # Prompts are plain text, never HTML
    return Environment(
        loader=PackageLoader("naya.infrastructure.llm", "templates"),
        autoescape=False,
        undefined=StrictUndefined,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=False,
    )


def load_persona_template(source: str | None = None) -> Template:
    """Return the persona preamble template.

    Args:
        source: Template text that replaces the bundled persona.j2.
    """
    env = create_jinja_env()
    if source:
        return env.from_string(source)
    return env.get_template(PERSONA_TEMPLATE)
