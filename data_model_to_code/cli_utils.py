"""
CLI utilities for command line reconstruction and introspection.
"""

from pathlib import Path

import click

PROGRAM = "data_model_to_code"


def reconstruct_command_line() -> str:
    """
    Reconstruct the running command line from the current Click context.

    The command path (group and subcommand) is followed by the positional
    arguments and then the options that differ from their defaults. File
    paths are shortened to their names.

    Returns:
        Reconstructed command line string, or the program name when no
        Click context is active
    """
    try:
        ctx = click.get_current_context()
    except RuntimeError:
        return PROGRAM

    commands = []
    current = ctx
    while current.parent is not None:
        commands.insert(0, current.info_name)
        current = current.parent

    arguments = []
    options = []
    for param in ctx.command.params:
        value = ctx.params.get(param.name)
        if value is None or value is False or value == param.default:
            continue

        if isinstance(value, (str, Path)):
            path_obj = Path(str(value))
            formatted_value = path_obj.name if path_obj.exists() else str(value)
        else:
            formatted_value = str(value)

        if isinstance(param, click.Argument):
            arguments.append(formatted_value)
        elif isinstance(param, click.Option):
            flag = param.opts[0] if param.opts else f"--{param.name}"
            if value is True:
                options.append(flag)
            else:
                options.extend([flag, formatted_value])

    return " ".join([PROGRAM, *commands, *arguments, *options])
