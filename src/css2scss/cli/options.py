"""Click options shared by the convert and batch commands."""

from __future__ import annotations

import logging
from typing import Any, Callable

import click

from css2scss.config import ConversionOptions
from css2scss.converter import Converter
from css2scss.errors import ConfigurationError
from css2scss.events import EventBus, logging_listener

_OPTIONS = [
    click.option("-i", "--indent-size", default=2, show_default=True, type=int, help="Indentation width"),
    click.option(
        "-t",
        "--indent-type",
        default="spaces",
        show_default=True,
        type=click.Choice(["spaces", "tabs"]),
        help="Indent with spaces or tabs",
    ),
    click.option("--comments/--no-comments", default=True, help="Keep CSS comments"),
    click.option("-s", "--sort/--no-sort", default=False, help="Sort properties and nested rules"),
    click.option("--bem/--no-bem", default=True, help="BEM-aware nesting"),
    click.option("--smart-nesting/--no-smart-nesting", default=True, help="Smart nesting"),
    click.option("--max-depth", default=5, show_default=True, type=int, help="Maximum nesting depth"),
    click.option("--dedupe/--no-dedupe", default=True, help="Merge rules with identical declarations"),
    click.option("--media-grouping/--no-media-grouping", default=True, help="Group rules per media query"),
    click.option("--variables/--no-variables", default=True, help="Extract repeated values to variables"),
    click.option("--var-prefix", default="$", show_default=True, help="Variable prefix"),
    click.option(
        "--min-occurrences",
        default=2,
        show_default=True,
        type=int,
        help="Occurrences needed before a value becomes a variable",
    ),
    click.option("--extract-colors/--no-extract-colors", default=True, help="Extract color variables"),
    click.option("--extract-sizes/--no-extract-sizes", default=True, help="Extract size variables"),
    click.option("--extract-fonts/--no-extract-fonts", default=True, help="Extract font variables"),
    click.option("--extract-others/--no-extract-others", default=True, help="Extract other variables"),
    click.option("-v", "--verbose", is_flag=True, help="Log merges and extracted variables"),
]


def conversion_options(func: Callable) -> Callable:
    """Decorate a command with every conversion option."""
    for option in reversed(_OPTIONS):
        func = option(func)
    return func


def options_from_flags(flags: dict[str, Any]) -> ConversionOptions:
    return ConversionOptions(
        indent_size=flags["indent_size"],
        indent_type=flags["indent_type"],
        preserve_comments=flags["comments"],
        sort_properties=flags["sort"],
        enable_bem=flags["bem"],
        enable_smart_nesting=flags["smart_nesting"],
        max_nesting_depth=flags["max_depth"],
        enable_duplicate_detection=flags["dedupe"],
        enable_media_query_grouping=flags["media_grouping"],
        enable_variable_extraction=flags["variables"],
        variable_prefix=flags["var_prefix"],
        min_occurrences=flags["min_occurrences"],
        extract_colors=flags["extract_colors"],
        extract_sizes=flags["extract_sizes"],
        extract_fonts=flags["extract_fonts"],
        extract_others=flags["extract_others"],
    )


def build_converter(flags: dict[str, Any]) -> Converter:
    """Create a Converter from command flags; bad values become usage errors."""
    try:
        options = options_from_flags(flags)
    except ConfigurationError as exc:
        raise click.BadParameter(str(exc)) from exc
    bus = EventBus()
    if flags["verbose"]:
        logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
        bus.on_all(logging_listener())
    return Converter(options, event_bus=bus)


def describe(options: ConversionOptions) -> list[str]:
    """Human-readable summary of the options used."""
    def flag(value: bool, on: str = "enabled", off: str = "disabled") -> str:
        return on if value else off

    lines = [
        f"Indent: {options.indent_size} {options.indent_type.value}",
        f"Comments: {flag(options.preserve_comments, 'preserved', 'removed')}",
        f"Sort properties: {flag(options.sort_properties, 'yes', 'no')}",
        f"BEM support: {flag(options.enable_bem)}",
        f"Smart nesting: {flag(options.enable_smart_nesting)}",
        f"Max nesting depth: {options.max_nesting_depth}",
        f"Duplicate detection: {flag(options.enable_duplicate_detection)}",
        f"Media query grouping: {flag(options.enable_media_query_grouping)}",
        f"Variable extraction: {flag(options.enable_variable_extraction)}",
    ]
    if options.enable_variable_extraction:
        lines += [
            f"Variable prefix: {options.variable_prefix}",
            f"Min occurrences: {options.min_occurrences}",
            f"Extract colors: {flag(options.extract_colors, 'yes', 'no')}",
            f"Extract sizes: {flag(options.extract_sizes, 'yes', 'no')}",
            f"Extract fonts: {flag(options.extract_fonts, 'yes', 'no')}",
            f"Extract others: {flag(options.extract_others, 'yes', 'no')}",
        ]
    return lines
