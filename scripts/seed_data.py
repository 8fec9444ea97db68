import argparse
from datetime import timedelta
from decimal import Decimal

from sqlalchemy import delete, select

from ledgerboard.config import get_settings
from ledgerboard.core.dates import utc_now
from ledgerboard.core.logging import setup_logging
from ledgerboard.core.security import hash_password
from ledgerboard.database import init_db, session_scope
from ledgerboard.models import InventoryItem, Recommendation, Transaction, User
from ledgerboard.schemas.transaction import TransactionCreate
from ledgerboard.services import record_store
from ledgerboard.services.stock_service import apply_transaction

# name, category, stock, min, unit, price, supplier
INVENTORY = [
    ("Kopi Arabica", "Minuman", 25, 10, "kg", "25000", "CV Kopi Nusantara"),
    ("Tepung Terigu", "Bahan Baku", 2, 5, "kg", "12000", "Toko Bahan Kue"),
    ("Gula Pasir", "Bahan Baku", 8, 10, "kg", "15000", "Toko Serba Ada"),
    ("Susu Cair", "Bahan Baku", 15, 20, "liter", "8000", "Distributor Susu"),
    ("Pastry Mix", "Kue", 50, 15, "pcs", "30000", "Supplier Kue"),
    ("Roti Bakar", "Makanan", 30, 10, "pcs", "15000", "Pabrik Roti"),
]

# type, amount, description, category, item index, quantity, days ago
TRANSACTIONS = [
    ("sale", "125000", "Penjualan Kopi Arabica", "Minuman", 0, 5, 0),
    ("sale", "350000", "Penjualan Pastry Mix", "Kue", 4, 12, 2),
    ("sale", "450000", "Penjualan Roti Bakar", "Makanan", 5, 30, 5),
    ("sale", "200000", "Penjualan Kopi Arabica", "Minuman", 0, 8, 9),
    ("sale", "180000", "Penjualan Pastry Mix", "Kue", 4, 6, 15),
    ("purchase", "850000", "Pembelian Bahan Baku", "Bahan Baku", 1, 50, 20),
    ("purchase", "300000", "Pembelian Gula Pasir", "Bahan Baku", 2, 20, 12),
    ("purchase", "500000", "Pembelian Kopi Arabica", "Minuman", 0, 20, 25),
    ("expense", "150000", "Listrik dan Air", "Utilitas", None, None, 3),
    ("expense", "200000", "Transport dan Pengiriman", "Operasional", None, None, 7),
    ("expense", "100000", "Alat Tulis dan Kemasan", "Operasional", None, None, 18),
]

RECOMMENDATIONS = [
    {
        "type": "restock",
        "title": "Stok Ulang Tepung Terigu",
        "description": (
            "Berdasarkan pola penjualan, Anda perlu menambah stok tepung terigu "
            "dalam 3 hari. Stok saat ini sangat rendah."
        ),
        "priority": "critical",
        "actionable": True,
        "metadata": {
            "estimatedCost": "IDR 240,000",
            "timeframe": "3 hari",
            "expectedBenefit": "Menghindari kehabisan stok",
        },
    },
    {
        "type": "sales_opportunity",
        "title": "Peluang Penjualan Pastry Mix",
        "description": (
            "Pastry mix memiliki tren penjualan naik 25% bulan ini. "
            "Pertimbangkan promosi khusus untuk meningkatkan penjualan."
        ),
        "priority": "medium",
        "actionable": True,
        "metadata": {"timeframe": "Bulan ini"},
    },
]


def parse_args():
    parser = argparse.ArgumentParser(description="Seed sample bookkeeping data.")
    parser.add_argument(
        "--reset",
        action="store_true",
        help="Clear existing data before seeding.",
    )
    parser.add_argument("--username", default="demo", help="Username of the demo owner.")
    parser.add_argument("--password", default="demo1234", help="Password of the demo owner.")
    return parser.parse_args()


def main():
    setup_logging()
    args = parse_args()
    init_db()

    with session_scope() as db:
        if args.reset:
            db.execute(delete(Recommendation))
            db.execute(delete(Transaction))
            db.execute(delete(InventoryItem))
            db.execute(delete(User))
            db.commit()

        has_user = db.execute(select(User.id).limit(1)).first()
        if has_user:
            print("Seed skipped: users already exist.")
            return

        user = User(
            id=get_settings().DEFAULT_USER_ID,
            username=args.username,
            password_hash=hash_password(args.password),
            name="Budi Santoso",
            business_name="Warung Kopi Budi",
        )
        db.add(user)
        db.flush()

        items = []
        for name, category, stock, minimum, unit, price, supplier in INVENTORY:
            items.append(
                record_store.create_inventory_item(
                    db,
                    user.id,
                    {
                        "name": name,
                        "category": category,
                        "current_stock": stock,
                        "min_stock_level": minimum,
                        "unit": unit,
                        "price_per_unit": Decimal(price),
                        "supplier": supplier,
                    },
                )
            )
        db.commit()

        now = utc_now()
        # oldest first so stock moves in posting order
        for tx_type, amount, description, category, index, quantity, days_ago in sorted(
            TRANSACTIONS, key=lambda row: -row[6]
        ):
            apply_transaction(
                db,
                user.id,
                TransactionCreate(
                    type=tx_type,
                    amount=amount,
                    description=description,
                    category=category,
                    inventory_item_id=items[index].id if index is not None else None,
                    quantity=quantity,
                    date=now - timedelta(days=days_ago),
                ),
            )

        for draft in RECOMMENDATIONS:
            record_store.create_recommendation(db, user.id, draft)
    print("Seed data created.")


if __name__ == "__main__":
    main()
