"""검색 결과 페이지에서 카드 raw 필드 추출 (Playwright).

추출 규칙은 extraction_rules의 CardRules를 그대로 직렬화해 in-page 스크립트로 넘깁니다.
Lightweight 경로와 같은 first-match-wins 순서를 브라우저 안에서 재현합니다.
"""

from __future__ import annotations

from typing import Dict, List, Optional

from playwright.async_api import Page

from product_feed.crawlers.extraction_rules import CardRules


EXTRACT_SCRIPT = """
({ rules, maxCards }) => {
  const clean = (v) => (v || "").replace(/\\s+/g, " ").trim();

  const applyRule = (card, rule) => {
    const target = rule.selector ? card.querySelector(rule.selector) : card;
    if (!target) return null;
    let value = rule.attribute ? target.getAttribute(rule.attribute) : target.textContent;
    value = clean(value);
    if (rule.firstToken && value) value = value.split(" ")[0];
    if (!value) return null;
    if (rule.pattern && !new RegExp(rule.pattern).test(value)) return null;
    return value;
  };

  const firstMatch = (card, fieldRules) => {
    for (const rule of fieldRules) {
      const value = applyRule(card, rule);
      if (value !== null) return value;
    }
    return null;
  };

  const cards = Array.from(document.querySelectorAll(rules.cardSelector)).slice(0, maxCards);
  return cards.map((card) => {
    const record = {};
    for (const [name, fieldRules] of Object.entries(rules.fields)) {
      record[name] = firstMatch(card, fieldRules);
    }
    return record;
  });
}
"""


async def extract_raw_listings(
    page: Page,
    rules: CardRules,
    max_cards: int,
) -> List[Dict[str, Optional[str]]]:
    """
    현재 페이지의 카드들을 문서 순서대로 raw 레코드로 변환

    Args:
        page: 결과 페이지가 로드된 Page
        rules: 카드/필드 추출 규칙
        max_cards: 스크립트가 검사할 최대 카드 수

    Returns:
        필드명 -> 문자열(또는 None) 딕셔너리 리스트
    """
    records = await page.evaluate(
        EXTRACT_SCRIPT,
        {"rules": rules.to_payload(), "maxCards": max_cards},
    )
    return list(records or [])
