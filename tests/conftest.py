from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from modernizer.config import get_settings
from modernizer.routes.analysis import get_client_factory
from modernizer.server import app
from modernizer.services.prompts import ANALYSIS_PROMPTS

LEGACY_JS = """var total = 0;
function addItems(items, callback) {
  for (var i = 0; i < items.length; i++) {
    total += items[i].price;
  }
  document.getElementById('total').innerHTML = total;
  callback(total);
}
"""

MODERN_JS = """import { fetchItems } from './api.js';

/** Sum the item prices. */
export class Cart {
  constructor(items) {
    this.items = items;
  }
}

export const loadTotal = async () => {
  try {
    const items = await fetchItems();
    let total = items.reduce((sum, item) => sum + item.price, 0);
    return total;
  } catch (error) {
    console.log(error);
  }
};
"""


def category_for_prompt(prompt: str) -> str:
    return next(
        category for category, template in ANALYSIS_PROMPTS.items() if prompt.startswith(template)
    )


DEFAULT_ANSWER = "Consider this example. I recommend using modern syntax."


class FakeGeminiClient:
    """Stands in for GeminiClient; answers per category."""

    def __init__(self, responses: dict | None = None, default: str = DEFAULT_ANSWER):
        self.responses = responses or {}
        self.default = default
        self.prompts: list[str] = []
        self.api_keys: list[str] = []
        self.close_count = 0

    async def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        outcome = self.responses.get(category_for_prompt(prompt), self.default)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    async def aclose(self) -> None:
        self.close_count += 1


@pytest.fixture
def fake_gemini() -> FakeGeminiClient:
    return FakeGeminiClient()


@pytest.fixture
def client(fake_gemini):
    def factory_override():
        def factory(api_key: str) -> FakeGeminiClient:
            fake_gemini.api_keys.append(api_key)
            return fake_gemini

        return factory

    app.dependency_overrides[get_client_factory] = factory_override
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def demo_key() -> str:
    return get_settings().demo_key
