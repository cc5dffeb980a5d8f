"""Building the argument vector for one batch."""

import shlex
from typing import List, Optional, Sequence

from xtemp.domain.exceptions import ConfigurationError
from xtemp.domain.models import CommandTemplate
from xtemp.shared.types import Quoter

SHELL_PREFIX = ("sh", "-eu", "-c")


def resolve_arguments(
    tokens: Sequence[str],
    placeholder: Optional[str],
    replacements: Sequence[str]
) -> List[str]:
    """
    Substitute replacement tokens into a command template.

    Every token exactly equal to ``placeholder`` expands in place to the
    full list of replacements; tokens that merely contain it are left alone.
    Without a placeholder the replacements are appended at the end.

    Args:
        tokens: Template tokens, program first
        placeholder: Token marking the expansion site, or None
        replacements: Paths to substitute, in order

    Returns:
        The resolved argument list

    Raises:
        ConfigurationError: If the template is empty
    """
    if not tokens:
        raise ConfigurationError("missing required argument: command")

    if placeholder is None:
        return list(tokens) + list(replacements)

    resolved: List[str] = []
    for token in tokens:
        if token == placeholder:
            resolved.extend(replacements)
        else:
            resolved.append(token)
    return resolved


def build_argv(
    template: CommandTemplate,
    replacements: Sequence[str],
    shell: bool = False,
    quote: Quoter = shlex.quote
) -> List[str]:
    """
    Produce the argv handed to the process runner.

    In shell mode each replacement is quoted, the resolved tokens are joined
    into a single script and run with ``sh -eu -c``; template tokens are
    taken as shell text. Otherwise every token is passed as its own argument.
    """
    if not shell:
        return resolve_arguments(template.tokens, template.placeholder, replacements)

    quoted = [quote(r) for r in replacements]
    script = " ".join(resolve_arguments(template.tokens, template.placeholder, quoted))
    return [*SHELL_PREFIX, script]
