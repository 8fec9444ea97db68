import json
import unittest
from decimal import Decimal
from unittest import mock

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from ledgerboard.config import Settings
from ledgerboard.core.errors import NotFoundError, RecommendationUnavailable
from ledgerboard.database.base import Base
from ledgerboard.models import InventoryItem, Recommendation, User
from ledgerboard.services import recommendation_service

SERVICE = "ledgerboard.services.recommendation_service"


def _completion(content):
    response = mock.MagicMock()
    response.getcode.return_value = 200
    response.read.return_value = json.dumps(
        {"choices": [{"message": {"content": json.dumps(content)}}]}
    ).encode("utf-8")
    context = mock.MagicMock()
    context.__enter__.return_value = response
    return context


class ParseDraftsTest(unittest.TestCase):
    def test_drops_malformed_drafts(self):
        drafts = recommendation_service.parse_drafts(
            json.dumps(
                {
                    "recommendations": [
                        {"type": "restock", "title": "Stok Tepung", "description": "Tambah 20 kg",
                         "priority": "high"},
                        {"type": "marketing", "title": "x", "description": "y"},
                        {"type": "optimization", "title": "", "description": "y"},
                    ]
                }
            )
        )
        self.assertEqual(len(drafts), 1)
        self.assertEqual(drafts[0]["title"], "Stok Tepung")
        self.assertTrue(drafts[0]["actionable"])

    def test_all_malformed_is_unavailable(self):
        with self.assertRaises(RecommendationUnavailable):
            recommendation_service.parse_drafts('{"recommendations": [{"type": "x"}]}')

    def test_invalid_json_is_unavailable(self):
        with self.assertRaises(RecommendationUnavailable):
            recommendation_service.parse_drafts("not json")

    def test_rejects_non_http_url(self):
        with self.assertRaises(RecommendationUnavailable):
            recommendation_service.validate_api_url("file:///etc/passwd")


class GenerateDraftsTest(unittest.TestCase):
    def test_falls_back_when_not_configured(self):
        with mock.patch(SERVICE + ".get_settings", return_value=Settings(RECOMMENDER_API_KEY=None)):
            drafts = recommendation_service.generate_drafts([], [], {})
        self.assertEqual(drafts, recommendation_service.fallback_recommendations())

    def test_uses_generator_output(self):
        settings = Settings(RECOMMENDER_API_KEY="test-key")
        content = {
            "recommendations": [
                {"type": "sales_opportunity", "title": "Promo Akhir Pekan",
                 "description": "Diskon 10% untuk kopi", "priority": "low",
                 "metadata": {"timeframe": "Sabtu"}},
            ]
        }
        with mock.patch(SERVICE + ".get_settings", return_value=settings), mock.patch(
            SERVICE + ".request.urlopen", return_value=_completion(content)
        ) as urlopen:
            drafts = recommendation_service.generate_drafts([], [], {"business_name": "Warung"})

        self.assertEqual(drafts[0]["title"], "Promo Akhir Pekan")
        self.assertEqual(drafts[0]["metadata"], {"timeframe": "Sabtu"})
        sent = urlopen.call_args[0][0]
        self.assertEqual(sent.get_header("Authorization"), "Bearer test-key")

    def test_falls_back_on_network_error(self):
        settings = Settings(RECOMMENDER_API_KEY="test-key")
        with mock.patch(SERVICE + ".get_settings", return_value=settings), mock.patch(
            SERVICE + ".request.urlopen", side_effect=OSError("connection refused")
        ):
            drafts = recommendation_service.generate_drafts([], [], {})
        self.assertEqual(drafts[0]["title"], recommendation_service.FALLBACK_RECOMMENDATION["title"])


class GenerateRecommendationsTest(unittest.TestCase):
    def setUp(self):
        self.engine = create_engine("sqlite:///:memory:")
        Base.metadata.create_all(bind=self.engine)
        self.db = sessionmaker(bind=self.engine)()
        self.db.add(User(id=1, username="budi", password_hash="x", name="Budi"))
        self.db.add(
            InventoryItem(user_id=1, name="Tepung", current_stock=2, min_stock_level=10,
                          price_per_unit=Decimal("12000"))
        )
        self.db.commit()

    def tearDown(self):
        self.db.close()
        self.engine.dispose()

    def test_persists_fallback(self):
        with mock.patch(SERVICE + ".get_settings", return_value=Settings(RECOMMENDER_API_KEY=None)):
            saved = recommendation_service.generate_recommendations(self.db, 1)

        self.assertEqual(len(saved), 1)
        stored = self.db.query(Recommendation).filter(Recommendation.user_id == 1).all()
        self.assertEqual(len(stored), 1)
        self.assertFalse(stored[0].is_read)
        self.assertEqual(stored[0].priority, "medium")
        self.assertEqual(stored[0].details["timeframe"], "Minggu ini")

    def test_unknown_user(self):
        with self.assertRaises(NotFoundError):
            recommendation_service.generate_recommendations(self.db, 99)


if __name__ == "__main__":
    unittest.main()
