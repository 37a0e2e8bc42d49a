import io
from types import SimpleNamespace

import httpx
import pytest
import requests
from requests.adapters import BaseAdapter

from jsonlib import JSONLibrary


class CountingStream(httpx.SyncByteStream):
    def __init__(self, body=b"", error=None):
        self.body = body
        self.error = error
        self.close_calls = 0

    def __iter__(self):
        if self.error is not None:
            raise self.error
        yield self.body

    def close(self):
        self.close_calls += 1


class CountingRaw(io.BytesIO):
    """Raw body of a requests response counting close and connection release."""

    def __init__(self, data=b"", error=None):
        super().__init__(data)
        self.error = error
        self.close_calls = 0
        self.release_calls = 0

    def read(self, *args, **kwargs):
        if self.error is not None:
            raise self.error
        return super().read(*args, **kwargs)

    def close(self):
        self.close_calls += 1
        super().close()

    def release_conn(self):
        self.release_calls += 1


class StubAdapter(BaseAdapter):
    def __init__(self, status_code=200, body=b"", error=None, read_error=None):
        super().__init__()
        self.status_code = status_code
        self.body = body
        self.error = error
        self.read_error = read_error
        self.calls = []
        self.raws = []

    def send(self, request, stream=False, timeout=None, verify=True, cert=None, proxies=None):
        self.calls.append(
            {
                "method": request.method,
                "url": request.url,
                "content": request.body,
                "headers": request.headers,
                "timeout": timeout,
                "stream": stream,
            }
        )
        if self.error is not None:
            raise self.error
        raw = CountingRaw(self.body, self.read_error)
        self.raws.append(raw)
        response = requests.Response()
        response.status_code = self.status_code
        response.raw = raw
        response.request = request
        response.url = request.url
        return response

    def close(self):
        pass


@pytest.fixture
def mock_library():
    """Build a JSONLibrary over httpx.MockTransport answering every request the same way."""

    def _install(status_code=200, body=b"", error=None, stream_error=None):
        calls = []
        streams = []

        def handler(request):
            calls.append(
                {
                    "method": request.method,
                    "url": str(request.url),
                    "content": request.content,
                    "headers": request.headers,
                }
            )
            if error is not None:
                raise error
            stream = CountingStream(body, stream_error)
            streams.append(stream)
            return httpx.Response(status_code, stream=stream)

        library = JSONLibrary(client=httpx.Client(transport=httpx.MockTransport(handler)))
        return SimpleNamespace(library=library, calls=calls, streams=streams)

    return _install


@pytest.fixture
def mock_session():
    def _install(timeout=30.0, **adapter_kwargs):
        adapter = StubAdapter(**adapter_kwargs)
        session = requests.Session()
        session.mount("http://mock.local", adapter)
        library = JSONLibrary(client=session, timeout=timeout)
        return SimpleNamespace(library=library, adapter=adapter, session=session)

    return _install
