"""Built-in prompt templates: ``greeting`` and ``code_review``.

Language and complexity keys are matched case-insensitively; unrecognised
values fall back to English and ``medium`` respectively.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from switchboard.capabilities.arguments import Arguments
from switchboard.protocol.models import (
    PromptArgument,
    PromptDescriptor,
    PromptMessage,
    PromptResult,
    TextContent,
)

PromptRenderer = Callable[[Arguments], PromptResult]


@dataclass(frozen=True)
class Prompt:
    """A prompt descriptor paired with its renderer."""

    descriptor: PromptDescriptor
    renderer: PromptRenderer

    @property
    def name(self) -> str:
        return self.descriptor.name

    def render(self, arguments: Arguments) -> PromptResult:
        return self.renderer(arguments)


def _user_message(text: str) -> PromptMessage:
    return PromptMessage(role="user", content=TextContent(text=text))


# ---------------------------------------------------------------------------
# greeting
# ---------------------------------------------------------------------------

_GREETINGS: dict[str, str] = {
    "spanish": "¡Hola {name}! ¿Cómo estás?",
    "french": "Bonjour {name}! Comment allez-vous?",
    "german": "Hallo {name}! Wie geht es Ihnen?",
}
_DEFAULT_GREETING = "Hello {name}! How are you doing today?"


def render_greeting(arguments: Arguments) -> PromptResult:
    name = arguments.get_str("name", "friend")
    language = arguments.get_str("language", "English")
    template = _GREETINGS.get(language.lower(), _DEFAULT_GREETING)
    return PromptResult(
        description=f"A friendly greeting in {language}",
        messages=[_user_message(template.format(name=name))],
    )


# ---------------------------------------------------------------------------
# code_review
# ---------------------------------------------------------------------------

_COMPLEXITY_CHECKS: dict[str, tuple[str, ...]] = {
    "simple": (
        "Functions are small and focused",
        "Logic is straightforward and easy to follow",
        "Minimal dependencies",
    ),
    "medium": (
        "Functions have single responsibility",
        "Reasonable abstraction levels",
        "Dependencies are managed appropriately",
    ),
    "complex": (
        "Architecture patterns are appropriately used",
        "Complex logic is well-documented",
        "Performance implications are considered",
        "Scalability concerns are addressed",
        "Integration points are well-defined",
    ),
}


def complexity_checks(complexity: str) -> str:
    """Return the checklist fragment for *complexity* (``medium`` if unknown)."""
    checks = _COMPLEXITY_CHECKS.get(complexity.lower(), _COMPLEXITY_CHECKS["medium"])
    return "\n".join(f"- [ ] {check}" for check in checks)


def render_code_review(arguments: Arguments) -> PromptResult:
    language = arguments.get_str("language", "generic")
    complexity = arguments.get_str("complexity", "medium")
    template = "\n".join(
        [
            f"# Code Review Checklist for {language}",
            "",
            "## General Code Quality",
            f"- [ ] Code follows {language} best practices and conventions",
            "- [ ] Variable and function names are descriptive and meaningful",
            "- [ ] Code is properly commented where necessary",
            "- [ ] No duplicate code or unnecessary complexity",
            "",
            f"## {complexity.upper()} Complexity Specific Checks",
            complexity_checks(complexity),
            "",
            "## Security & Performance",
            "- [ ] No obvious security vulnerabilities",
            "- [ ] Efficient algorithms and data structures used",
            "- [ ] Proper error handling implemented",
            "",
            "## Testing",
            "- [ ] Unit tests cover main functionality",
            "- [ ] Edge cases are considered",
            "- [ ] Tests are maintainable and readable",
        ]
    )
    return PromptResult(
        description=f"Code review template for {language} ({complexity} complexity)",
        messages=[_user_message(template)],
    )


def builtin_prompts() -> list[Prompt]:
    return [
        Prompt(
            PromptDescriptor(
                name="greeting",
                description="Generate a personalized greeting message",
                arguments=(
                    PromptArgument(
                        name="name",
                        description="Name of the person to greet",
                        required=True,
                    ),
                    PromptArgument(
                        name="language",
                        description="Language for the greeting (English, Spanish, French, German)",
                    ),
                ),
            ),
            render_greeting,
        ),
        Prompt(
            PromptDescriptor(
                name="code_review",
                description="Generate a code review template",
                arguments=(
                    PromptArgument(
                        name="language",
                        description="Programming language",
                        required=True,
                    ),
                    PromptArgument(
                        name="complexity",
                        description="Code complexity level (simple, medium, complex)",
                    ),
                ),
            ),
            render_code_review,
        ),
    ]
