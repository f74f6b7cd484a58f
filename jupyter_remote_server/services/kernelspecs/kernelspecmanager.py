"""Kernel spec manager for kernelspecs served by a remote Jupyter server."""

import typing as t

from tornado.escape import json_decode
from tornado.httpclient import AsyncHTTPClient, HTTPRequest, HTTPResponse
from traitlets import Float, Unicode
from traitlets.config import LoggingConfigurable

from ...serversettings import ResolvedSettings
from .resources import rewrite_kernelspec_resources, rewrite_kernelspecs


class RemoteKernelSpecManager(LoggingConfigurable):
    """Fetches kernelspecs from the remote server and rewrites their resource URLs.

    The fetched model is kept as returned by the server. Resource URLs are
    rewritten each time specs are read, against the base URL of the current
    ``server_settings``, so replacing the settings never leaves stale URLs.
    """

    kernelspecs_endpoint = Unicode(
        "api/kernelspecs",
        config=True,
        help="""The kernelspecs endpoint, relative to the kernels base URL.""",
    )

    request_timeout = Float(
        20.0,
        config=True,
        help="""Timeout in seconds for the kernelspecs request.""",
    )

    def __init__(self, server_settings: ResolvedSettings, **kwargs: t.Any) -> None:
        super().__init__(**kwargs)
        self.server_settings = server_settings
        self._specs: t.Optional[t.Dict[str, t.Any]] = None

    @property
    def specs(self) -> t.Optional[t.Dict[str, t.Any]]:
        """The kernelspecs model with absolute resource URLs, ``None`` until refreshed."""
        if self._specs is None:
            return None
        return rewrite_kernelspecs(self._specs, self.server_settings.base_url)

    def get_kernel_spec(self, kernel_name: str) -> t.Dict[str, t.Any]:
        """Return one kernelspec with absolute resource URLs.

        Raises
        ------
        KeyError
            If specs were not fetched yet or ``kernel_name`` is unknown.
        """
        kernelspecs = (self._specs or {}).get("kernelspecs") or {}
        if kernel_name not in kernelspecs:
            raise KeyError(kernel_name)
        return rewrite_kernelspec_resources(kernelspecs[kernel_name], self.server_settings.base_url)

    async def _fetch(self, request: HTTPRequest) -> HTTPResponse:
        return await AsyncHTTPClient().fetch(request)

    async def refresh_specs(self) -> t.Dict[str, t.Any]:
        """Fetch the kernelspecs from the remote server."""
        url = self.server_settings.make_url(self.kernelspecs_endpoint)
        self.log.debug(f"Request kernel specs at: {url}")
        request = HTTPRequest(
            url,
            method="GET",
            headers=self.server_settings.request_headers,
            request_timeout=self.request_timeout,
        )
        response = await self._fetch(request)
        self._specs = json_decode(response.body)
        self.log.debug(f"Fetched {len(self._specs.get('kernelspecs') or {})} kernel specs from {url}")
        return self.specs
