import pytest

from cdplog.models import LogEntry

CHROMEDRIVER_LOG = """[01-01-2024 12:00:00.000000][INFO]: Starting ChromeDriver
[01-01-2024 12:00:00.001000][DEBUG]: DevTools WebSocket Command: Method: Target.createTarget (id=1)
[01-01-2024 12:00:00.002000][DEBUG]: DevTools WebSocket Response: Method: Target.createTarget (id=1) { "result": { "targetId": "123" } }"""

PUPPETEER_LOG = """
  puppeteer:protocol:SEND ► [ '{"method":"Browser.getVersion","id":1}' ] +0ms
  puppeteer:protocol:RECV ◀ [
  puppeteer:protocol:RECV ◀   '{"id":1,"result":{"protocolVersion":"1.3","product":"Chrome/119.0.6019.3"}}'
  puppeteer:protocol:RECV ◀ ] +0ms
  puppeteer:protocol:SEND ► [ '{"method":"Target.getBrowserContexts","id":2}' ] +0ms
  puppeteer:protocol:RECV ◀ [ '{"id":2,"result":{"browserContextIds":[]}}' ] +0ms
  puppeteer:protocol:RECV ◀ [
  puppeteer:protocol:RECV ◀   '{"method":"Target.targetCreated","params":{"targetInfo":{"targetId":"2419ADFC264","type":"page"}}}'
  puppeteer:protocol:RECV ◀ ] +0ms
"""

WPT_LOG = """Protocol message: {"id":1,"method":"Target.createTarget","params":{"url":"about:blank"}}
Protocol message: {"id":1,"result":{"targetId":"D847C693AFE81CF7C9BA982D50520530"}}
Protocol message: {"method":"Page.lifecycleEvent","params":{"name":"load","timestamp":26265.600564}}
Protocol message: {"id":2,"method":"Page.navigate","params":{"url":"http://example.com"}}
Protocol message: {"id":2,"result":{"frameId":"D847C693AF","loaderId":"4AE58507C5"}}"""

PROTOCOL_MONITOR_LOG = """[
  {
    "method": "Network.requestWillBeSent",
    "params": {
      "requestId": "123",
      "timestamp": 1000
    }
  },
  {
    "method": "Target.getTargets",
    "id": 1,
    "requestTime": 1700000,
    "wallTime": 1700000.123,
    "result": {
      "targetInfos": []
    }
  }
]"""

WEBDRIVER_NESTED_LOG = """[01-01-2024 12:00:00.000000][INFO]: COMMAND A {
}
[01-01-2024 12:00:00.100000][INFO]: COMMAND B {
}
[01-01-2024 12:00:00.200000][INFO]: RESPONSE B {
}
[01-01-2024 12:00:00.300000][INFO]: RESPONSE A {
}"""


def make_entry(
    entry_id: int,
    kind: str = "event",
    command_id: int | None = None,
    log_type: str = "DevTools",
    **kwargs,
) -> LogEntry:
    """Build a raw (uncorrelated) entry for correlator and formatter tests."""
    return LogEntry(
        id=entry_id,
        line_number=entry_id + 1,
        timestamp=kwargs.pop("timestamp", ""),
        level=kwargs.pop("level", "INFO"),
        message=kwargs.pop("message", f"{kind} {entry_id}"),
        command_id=command_id,
        is_command=kind == "command",
        is_response=kind == "response",
        log_type=log_type,
        **kwargs,
    )


@pytest.fixture
def chromedriver_log():
    return CHROMEDRIVER_LOG


@pytest.fixture
def puppeteer_log():
    return PUPPETEER_LOG


@pytest.fixture
def wpt_log():
    return WPT_LOG


@pytest.fixture
def protocol_monitor_log():
    return PROTOCOL_MONITOR_LOG


@pytest.fixture
def webdriver_nested_log():
    return WEBDRIVER_NESTED_LOG


@pytest.fixture(params=["chromedriver", "puppeteer", "wpt", "protocol_monitor", "webdriver_nested"])
def any_log(request):
    """Every sample log, for properties that hold across dialects."""
    return {
        "chromedriver": CHROMEDRIVER_LOG,
        "puppeteer": PUPPETEER_LOG,
        "wpt": WPT_LOG,
        "protocol_monitor": PROTOCOL_MONITOR_LOG,
        "webdriver_nested": WEBDRIVER_NESTED_LOG,
    }[request.param]
