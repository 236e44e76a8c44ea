import pytest


class FakeCompletionClient:
    """Stands in for GeminiTextClient: replays canned texts or raises canned errors."""

    def __init__(self, *outcomes):
        self.outcomes = list(outcomes)
        self.calls = []

    async def generate_json(self, prompt, response_schema):
        self.calls.append((prompt, response_schema))
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


@pytest.fixture
def make_client():
    return FakeCompletionClient


@pytest.fixture
def five_pois_json():
    return """[
        {"name": "Phố cổ Hội An", "description": "Khu phố cổ được UNESCO công nhận.", "coordinates": {"lat": 15.8801, "lng": 108.338}},
        {"name": "Chùa Cầu", "description": "Cây cầu mái ngói biểu tượng.", "coordinates": {"lat": 15.8771, "lng": 108.3262}},
        {"name": "Rừng dừa Bảy Mẫu", "description": "Đi thuyền thúng giữa rừng dừa.", "coordinates": {"lat": 15.8747, "lng": 108.3691}},
        {"name": "Biển An Bàng", "description": "Bãi biển yên bình.", "coordinates": {"lat": 15.9134, "lng": 108.3407}},
        {"name": "Làng gốm Thanh Hà", "description": "Làng nghề gốm truyền thống.", "coordinates": {"lat": 15.8803, "lng": 108.3082}}
    ]"""
