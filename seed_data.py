import json
import logging
import sys
from sqlmodel import Session, select
from storefront.core.logging import setup_logging, log_success
from storefront.db.session import engine, create_db_and_tables
from storefront.models.product import Product
from storefront.models.user import User

logger = logging.getLogger("storefront.seed")

def mock_products(count: int = 20):
    return [
        Product(
            name=f"Product {i + 1}",
            price=(i + 1) * 10,
            image=f"/images/product-{i + 1}.webp",
            amount_in_stock=100 if i % 2 == 0 else 0,
        )
        for i in range(count)
    ]

def mock_users():
    return [
        User(name="Ada Lovelace", email="ada@example.com"),
        User(name="Alan Turing", email="alan@example.com"),
        User(name="Grace Hopper", email="grace@example.com"),
    ]

def seed(output_path: str = None):
    logger.info("Creating database and tables...")
    create_db_and_tables()

    with Session(engine) as session:
        # Check if products already exist to avoid duplicates
        existing_products = session.exec(select(Product)).all()
        if existing_products:
            logger.info("Database already contains %d products. Skipping seed.", len(existing_products))
            return

        logger.info("Seeding initial products and users...")
        products = mock_products()
        # Ids are generated client side, so the dump is complete before commit
        mock_data = [p.model_dump(mode="json") for p in products]
        for record in products + mock_users():
            session.add(record)
        session.commit()

        if output_path:
            with open(output_path, "w") as f:
                json.dump(mock_data, f, indent=4)
            log_success(logger, "Mock data written to file: %s", output_path)

        log_success(logger, "Successfully seeded %d products!", len(products))

if __name__ == "__main__":
    setup_logging()
    seed(sys.argv[1] if len(sys.argv) > 1 else None)
