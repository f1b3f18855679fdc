"""
Link Builder

Computes the hypermedia relations attached to each block directory item.
"""

from .models import INSTALL_RELATION, PLUGIN_RELATION, ItemLink
from .urls import add_query_arg


def rest_url(rest_base: str, route: str) -> str:
    return rest_base.rstrip("/") + "/" + route.lstrip("/")


def build_links(slug: str, local_file: str | None, rest_base: str,
                module_file_suffix: str = ".php") -> dict[str, list[ItemLink]]:
    """
    Build the links for one catalog block.

    Every item links to the installer. Blocks whose module is installed locally also
    link to the installed module resource, named by the module file without its suffix.
    """
    links = {
        INSTALL_RELATION: [ItemLink(href=add_query_arg(rest_url(rest_base, "wp/v2/plugins"), "slug", slug))]
    }

    if local_file:
        resource = local_file
        if module_file_suffix and resource.endswith(module_file_suffix):
            resource = resource[:-len(module_file_suffix)]
        links[PLUGIN_RELATION] = [
            ItemLink(href=rest_url(rest_base, f"wp/v2/plugins/{resource}"), embeddable=True)
        ]

    return links
