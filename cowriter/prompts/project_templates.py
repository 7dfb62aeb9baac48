"""Fixed prompt texts sent into a project's conversation."""

PROJECT_CONTEXT_PREFIX = """
# Instructions

- Always respond in the same language used in the "Context" section below.
- Do not respond to this message. It exists only to provide you with the conversation context
and configure your behavior.

# Context
"""

PROJECT_DEVELOPER_TEXT = """
You are a consultant for R&D and GMP facilities and pharmaceutical companies,
focused on ATMP development and production (Cell and Gene therapy) for clinical trial phases.
Always respond in Markdown.
"""


def section_prompt_prefix(section_name: str) -> str:
    return (
        f'# Section: "{section_name}"\n\n'
        "Write the content of this section of the document, following the request below.\n\n"
        "# Request\n"
    )


def section_improve_prefix(section_name: str) -> str:
    return (
        f'# Section: "{section_name}"\n\n'
        "Rewrite your latest content for this section, applying the improvement below. "
        "Return the whole revised section.\n\n"
        "# Improvement\n"
    )
