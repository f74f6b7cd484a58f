"""Rewrite kernelspec resource paths into absolute URLs on the remote server.

The kernelspecs API returns resources (kernel logos, ``kernel.js``...) as paths
rooted at the remote server, e.g. ``/kernelspecs/python3/logo-64x64.png``. A
browser client hosted on another origin would resolve those against its own
origin, so they are joined to the origin of the kernels base URL instead.
"""

import copy
import typing as t

from ...utils import is_absolute_url, url_origin


def rewrite_resource_url(resource_path: t.Optional[str], base_url: str) -> t.Optional[str]:
    """Return the absolute URL of ``resource_path`` on the server at ``base_url``.

    Empty paths and URLs that are already absolute are returned unchanged, which
    makes the rewrite idempotent. Query strings and fragments are kept.

    Raises
    ------
    RemoteServerConfigError
        If ``base_url`` is not an absolute http(s) URL.
    """
    if not resource_path:
        return resource_path
    if is_absolute_url(resource_path):
        return resource_path
    return f"{url_origin(base_url)}/{resource_path.lstrip('/')}"


def rewrite_kernelspec_resources(spec_model: t.Dict[str, t.Any], base_url: str) -> t.Dict[str, t.Any]:
    """Return a copy of a kernelspec model with all of its resources rewritten."""
    model = copy.deepcopy(spec_model)
    resources = model.get("resources")
    if isinstance(resources, dict):
        model["resources"] = {
            name: rewrite_resource_url(path, base_url) for name, path in resources.items()
        }
    return model


def rewrite_kernelspecs(specs_model: t.Dict[str, t.Any], base_url: str) -> t.Dict[str, t.Any]:
    """Rewrite every kernelspec of a ``/api/kernelspecs`` response."""
    model = dict(specs_model)
    model["kernelspecs"] = {
        name: rewrite_kernelspec_resources(spec, base_url)
        for name, spec in (specs_model.get("kernelspecs") or {}).items()
    }
    return model
