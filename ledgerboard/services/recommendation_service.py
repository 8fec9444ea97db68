import json
import logging
from urllib import error, request
from urllib.parse import urlparse

from pydantic import ValidationError as SchemaValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ledgerboard.config import get_settings
from ledgerboard.core.constants import UNCATEGORIZED_LABEL
from ledgerboard.core.errors import NotFoundError, PersistenceError, RecommendationUnavailable
from ledgerboard.schemas.recommendation import RecommendationDraft
from ledgerboard.services import record_store

logger = logging.getLogger(__name__)

_ALLOWED_HTTP_SCHEMES = {"http", "https"}
_PROMPT_TRANSACTION_LIMIT = 20

_SYSTEM_PROMPT = (
    "You are an expert business advisor for Indonesian small businesses. "
    "Provide practical, actionable advice tailored to the Indonesian market. "
    "Always respond with valid JSON."
)

FALLBACK_RECOMMENDATION = {
    "type": "optimization",
    "title": "Tinjau Kembali Strategi Inventori",
    "description": (
        "Sistem AI sedang dalam pemeliharaan. Silakan tinjau kembali level stok "
        "minimum dan pola penjualan Anda secara manual."
    ),
    "priority": "medium",
    "actionable": True,
    "metadata": {
        "timeframe": "Minggu ini",
        "expectedBenefit": "Optimalisasi modal kerja",
    },
}


def fallback_recommendations():
    return [dict(FALLBACK_RECOMMENDATION, metadata=dict(FALLBACK_RECOMMENDATION["metadata"]))]


def _or_na(value):
    return "N/A" if value in (None, "") else value


def build_prompt(transactions, inventory_items, business_context):
    lines = [
        "Analyze the following business data and provide actionable recommendations.",
        "",
        "Business Context:",
        "- Business Name: {}".format(business_context.get("business_name") or "Small Business"),
        "- Business Type: {}".format(business_context.get("business_type") or "General Retail"),
        "- Location: Indonesia",
        "- Currency: Indonesian Rupiah (IDR)",
        "",
        "Recent Transactions:",
    ]
    for transaction in transactions[:_PROMPT_TRANSACTION_LIMIT]:
        lines.append(
            "- {} | IDR {} | {} | {} | qty {}".format(
                transaction.type,
                transaction.amount,
                transaction.description,
                transaction.date,
                _or_na(transaction.quantity),
            )
        )
    lines.extend(["", "Current Inventory:"])
    for item in inventory_items:
        lines.append(
            "- {} ({}) | stock {} {} | min {} {} | IDR {} per unit | supplier {}".format(
                item.name,
                item.category or UNCATEGORIZED_LABEL,
                item.current_stock,
                item.unit,
                item.min_stock_level,
                item.unit,
                _or_na(item.price_per_unit),
                _or_na(item.supplier),
            )
        )
    lines.extend(
        [
            "",
            "Focus on restocking needs, sales opportunities and cost optimization.",
            'Respond as {"recommendations": [{"type": "restock|sales_opportunity|optimization", '
            '"title": str, "description": str, "priority": "low|medium|high|critical", '
            '"actionable": bool, "metadata": {"estimatedCost": str, "timeframe": str, '
            '"expectedBenefit": str}}]}',
        ]
    )
    return "\n".join(lines)


def build_payload(model, prompt):
    return {
        "model": model,
        "messages": [
            {"role": "system", "content": _SYSTEM_PROMPT},
            {"role": "user", "content": prompt},
        ],
        "response_format": {"type": "json_object"},
        "temperature": 0.7,
        "max_tokens": 2000,
    }


def validate_api_url(api_url):
    parsed = urlparse(api_url)
    scheme = parsed.scheme.lower()
    if scheme not in _ALLOWED_HTTP_SCHEMES or not parsed.netloc:
        raise RecommendationUnavailable("RECOMMENDER_API_URL must be an absolute HTTP(S) URL")
    return api_url


def parse_drafts(content):
    """Validate generator output; unknown types or priorities are dropped."""
    try:
        data = json.loads(content or '{"recommendations": []}')
    except (TypeError, ValueError) as exc:
        raise RecommendationUnavailable("Recommendation response is not valid JSON") from exc
    if not isinstance(data, dict):
        raise RecommendationUnavailable("Recommendation response must be a JSON object")

    raw_items = data.get("recommendations") or []
    if not isinstance(raw_items, list):
        raise RecommendationUnavailable("recommendations must be a list")

    drafts = []
    for raw in raw_items:
        try:
            drafts.append(RecommendationDraft.model_validate(raw).model_dump())
        except SchemaValidationError as exc:
            logger.warning("Dropping malformed recommendation draft: %s", exc.errors()[:1])
    if raw_items and not drafts:
        raise RecommendationUnavailable("No usable recommendations in response")
    return drafts


def _request_completion(prompt):
    settings = get_settings()
    api_url = (settings.RECOMMENDER_API_URL or "").strip()
    api_key = (settings.RECOMMENDER_API_KEY or "").strip()
    if not api_url or not api_key:
        raise RecommendationUnavailable("Recommendation generator is not configured")
    api_url = validate_api_url(api_url)

    body = json.dumps(build_payload(settings.RECOMMENDER_MODEL, prompt)).encode("utf-8")
    req = request.Request(
        api_url,
        data=body,
        method="POST",
        headers={
            "Content-Type": "application/json",
            "Authorization": "Bearer {}".format(api_key),
        },
    )

    try:
        with request.urlopen(req, timeout=settings.RECOMMENDER_TIMEOUT_SECONDS) as response:  # nosec B310
            status_code = response.getcode()
            if status_code < 200 or status_code >= 300:
                raise RecommendationUnavailable("Recommendation API error: HTTP {}".format(status_code))
            raw = response.read()
    except error.HTTPError as exc:
        raise RecommendationUnavailable("Recommendation API error: HTTP {}".format(exc.code)) from exc
    except (error.URLError, TimeoutError, OSError) as exc:
        raise RecommendationUnavailable("Recommendation API error: {}".format(exc)) from exc

    try:
        payload = json.loads(raw.decode("utf-8"))
        return payload["choices"][0]["message"]["content"]
    except (UnicodeDecodeError, ValueError, KeyError, IndexError, TypeError) as exc:
        raise RecommendationUnavailable("Unexpected recommendation API payload") from exc


def generate_drafts(transactions, inventory_items, business_context):
    prompt = build_prompt(transactions, inventory_items, business_context)
    try:
        return parse_drafts(_request_completion(prompt))
    except RecommendationUnavailable as exc:
        logger.warning("Using fallback recommendations: %s", exc)
        return fallback_recommendations()


def generate_recommendations(db: Session, user_id: int):
    settings = get_settings()
    user = record_store.get_user(db, user_id)
    if user is None:
        raise NotFoundError("User", user_id)

    transactions = record_store.get_transactions(db, user_id, settings.RECOMMENDATION_HISTORY_LIMIT)
    inventory_items = record_store.get_inventory_items(db, user_id)
    drafts = generate_drafts(
        transactions,
        inventory_items,
        {
            "business_name": user.business_name,
            "business_type": settings.BUSINESS_TYPE,
        },
    )

    try:
        saved = [record_store.create_recommendation(db, user_id, draft) for draft in drafts]
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Failed to store recommendations for user %s", user_id)
        raise PersistenceError("Unable to store recommendations") from exc

    logger.info("Stored %s recommendations for user %s", len(saved), user_id)
    return saved


__all__ = [
    "FALLBACK_RECOMMENDATION",
    "build_payload",
    "build_prompt",
    "fallback_recommendations",
    "generate_drafts",
    "generate_recommendations",
    "parse_drafts",
]
