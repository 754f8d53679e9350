"""
CLI utilities for command line reconstruction and introspection.
"""

from pathlib import Path

import click

PROGRAM_NAME = "schema_struct"


def reconstruct_command_line(click_command: click.Command) -> str:
    """
    Reconstruct command line from current Click context using introspection.

    Args:
        click_command: Click command object for introspection

    Returns:
        Reconstructed command line string
    """
    try:
        ctx = click.get_current_context()
        cli_args = ctx.params
    except RuntimeError:
        # No active context (library use)
        return PROGRAM_NAME

    if not cli_args:
        return PROGRAM_NAME

    arguments = []
    options = []

    for param in click_command.params:
        value = cli_args.get(param.name)
        if value is None:
            continue

        if isinstance(param, click.Argument):
            # File paths are shown by name only, inline schemas are elided
            text = str(value)
            if text.lstrip().startswith("{"):
                arguments.append("<inline schema>")
            else:
                path_obj = Path(text)
                arguments.append(path_obj.name if path_obj.exists() else text)

        elif isinstance(param, click.Option):
            # Skip values left at their default
            if value == param.default:
                continue
            if param.is_flag:
                # Boolean flags like --def/--no-def: pick the spelling matching the value
                flag = param.opts[0] if value else (param.secondary_opts or param.opts)[0]
                options.append(flag)
            else:
                options.extend([param.opts[0], str(value)])

    return " ".join([PROGRAM_NAME, *arguments, *options])
