import sys
import traceback
from decimal import Decimal

from finedine.database import Base, SessionLocal, engine
from finedine.models import MenuCategory, MenuItem
from finedine.utils.logging_config import setup_logging

logger = setup_logging()

MENU = [
    ("Starters", [
        ("Burrata", "Heirloom tomatoes, basil oil, grilled sourdough", "16.00"),
        ("Tuna Tartare", "Avocado, sesame, yuzu dressing", "19.00"),
        ("French Onion Soup", "Gruyère crouton", "14.00"),
    ]),
    ("Mains", [
        ("Filet Mignon", "8 oz, pommes purée, red wine jus", "48.00"),
        ("Pan-Seared Salmon", "Lemon beurre blanc, seasonal vegetables", "34.00"),
        ("Wild Mushroom Risotto", "Parmesan, truffle oil", "28.00"),
    ]),
    ("Desserts", [
        ("Crème Brûlée", "Tahitian vanilla", "12.00"),
        ("Chocolate Fondant", "Salted caramel ice cream", "13.00"),
    ]),
]


def seed_menu(db) -> int:
    """
    Legt Tabellen an und füllt die Speisekarte, falls noch leer.
    Gibt die Anzahl angelegter Gerichte zurück.
    """
    if db.query(MenuCategory).count() > 0:
        logger.info("Speisekarte bereits vorhanden, nichts zu tun")
        return 0

    created = 0
    for order, (category_name, items) in enumerate(MENU, start=1):
        category = MenuCategory(name=category_name, display_order=order)
        db.add(category)
        db.flush()
        for name, description, price in items:
            db.add(MenuItem(
                category_id=category.id,
                name=name,
                description=description,
                price=Decimal(price),
                is_available=True
            ))
            created += 1

    db.commit()
    return created


def main() -> int:
    """
    Exit-Code: 0 = Erfolg, 1 = Fehler
    """
    logger.info("Menü-Seed gestartet")
    Base.metadata.create_all(bind=engine)

    db = SessionLocal()
    try:
        created = seed_menu(db)
        logger.info(f"Menü-Seed fertig: {created} Gerichte angelegt")
        return 0
    except Exception as e:
        logger.error(f"Menü-Seed fehlgeschlagen: {e}")
        logger.error(traceback.format_exc())
        return 1
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
