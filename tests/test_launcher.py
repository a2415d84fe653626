import pytest

from adapters.http_client import HttpResponse
from core.domain.models import CrawlerCredentials
from core.errors import LaunchFailed
from core.services.launcher import launch_crawler

CREDENTIALS = CrawlerCredentials(user_id="abc", api_key="xyz12345")


class FakeTrigger:
    def __init__(self, status: int, body) -> None:
        self.response = HttpResponse(status=status, body=body)
        self.crawler_ids: list[str] = []

    async def reindex(self, credentials, crawler_id):
        self.crawler_ids.append(crawler_id)
        return self.response


@pytest.mark.asyncio
@pytest.mark.parametrize("status", [200, 201])
async def test_accepted_trigger_reports_monitoring_url(crawler_settings, console, output, status):
    api = FakeTrigger(status, {"taskId": "task-1"})

    result = await launch_crawler(api, CREDENTIALS, "crawler-77", crawler_settings, console)

    assert result.success
    assert result.crawler_id == "crawler-77"
    assert result.monitor_url == "https://www.algolia.com/dashboard/crawlers/crawler-77"
    assert result.exit_code == 0
    assert "crawler-77" in output.getvalue()
    assert api.crawler_ids == ["crawler-77"]


@pytest.mark.asyncio
async def test_rejected_trigger_raises_with_body(crawler_settings, console):
    api = FakeTrigger(409, {"message": "A reindex is already running"})

    with pytest.raises(LaunchFailed) as excinfo:
        await launch_crawler(api, CREDENTIALS, "c1", crawler_settings, console)

    assert "(Status: 409)" in excinfo.value.title
    assert "A reindex is already running" in str(excinfo.value)
