"""
optbind usage text.

Read-only consumer of a Registry: renders the usage message and the current
settings of every option. Nothing here affects parsing.

Layout
    Usage: prog [options] files...         (printed by Options.print_usage())

    General options:
      -h --help=<boolean>           - Display help message [default false]
      --lp=<regex> [+]              - list of patterns

    [+] means option can be specified multiple times
"""
from .coercion import render
from .parser import ParserConfig

LIST_HELP = "[+] means option can be specified multiple times"


def synopsis(descriptor, /, config=ParserConfig()):
    """
    Short synopsis of one option: "[-s ]--long=<label>[ [+]]".
    """
    prefix = "-" if config.single_dash else "--"
    name = prefix + descriptor.display_name(config.use_dashes)
    if descriptor.short_name is not None:
        name = "-%s %s" % (descriptor.short_name, name)
    name += "=<%s>" % descriptor.label
    if descriptor.is_list:
        name += " [+]"
    return name


def _visible(descriptors, show_unpublicized, /):
    return [descriptor for descriptor in descriptors if show_unpublicized or not descriptor.unpublicized]


def sections(registry, /, *groups, show_unpublicized=False):
    """
    Select what a usage message lists, as (group name or None, options) pairs.

    - group-less registry: one section with every (visible) option; naming groups
      is an error.
    - no group named: every group that is publicized and has a publicized option.
    - groups named: exactly those, in the given order.

    Raises
    - ValueError: for groups on a group-less registry, an unknown group, or a
      named group without publicized options (unless show_unpublicized).
    """
    if not registry.has_groups:
        if groups:
            raise ValueError("this registry does not have any option groups defined")
        return [(None, _visible(registry.descriptors, show_unpublicized))]

    selected = []
    if groups:
        for name in groups:
            group = registry.group(name)
            if not show_unpublicized and not group.publicized:
                raise ValueError("group does not contain any publicized options: %s" % name)
            selected.append(group)
    else:
        for group in registry.groups.values():
            if (group.unpublicized or not group.publicized) and not show_unpublicized:
                continue
            selected.append(group)

    return [(group.name, _visible(group.options, show_unpublicized)) for group in selected]


def usage(registry, /, *groups, config=ParserConfig(), show_unpublicized=False):
    """
    Usage message for the options of registry (see sections() for the selection).
    """
    selected = sections(registry, *groups, show_unpublicized=show_unpublicized)
    width = max((len(synopsis(descriptor, config)) for _, options in selected for descriptor in options), default=0)

    blocks = []
    for name, options in selected:
        if name is not None:
            blocks.append("\n%s:" % name)
        lines = []
        for descriptor in options:
            default = ""
            if descriptor.default is not None and not descriptor.nodocdefault:
                default = " [default %s]" % descriptor.default
            lines.append("  %-*s - %s%s" % (width, synopsis(descriptor, config), descriptor.description, default))
        blocks.append("\n".join(lines))
    return "\n".join(blocks)


def lists(registry, /, *groups, show_unpublicized=False):
    """
    Whether the usage message selected by the same arguments shows a list option.
    """
    return any(
        descriptor.is_list
        for _, options in sections(registry, *groups, show_unpublicized=show_unpublicized)
        for descriptor in options
    )


def _current(descriptor, /):
    value = descriptor.value
    if descriptor.is_list and value is not None:
        return "[%s]" % ", ".join(render(descriptor.target, element) for element in value)
    return str(render(descriptor.target, value))


def settings(registry, /, config=ParserConfig(), show_unpublicized=False):
    """
    Current value of every (visible) option, one "long-name = value" line each.
    """
    visible = _visible(registry.descriptors, show_unpublicized)
    width = max((len(descriptor.display_name(config.use_dashes)) for descriptor in visible), default=0)
    return "\n".join(
        "%-*s = %s" % (width, descriptor.display_name(config.use_dashes), _current(descriptor))
        for descriptor in visible
    )


__all__ = (
    "LIST_HELP",
    "synopsis",
    "sections",
    "usage",
    "lists",
    "settings",
)
