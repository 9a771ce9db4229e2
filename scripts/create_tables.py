"""Create all database tables (local development; production uses alembic)."""
import logging
from writine.db.base_class import Base
from writine.db.session import engine
# Import all models so they are registered with Base.metadata
import writine.models  # noqa: F401

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def create_tables():
    logger.info("Creating all database tables...")
    Base.metadata.create_all(bind=engine)
    logger.info("All tables created successfully!")


if __name__ == "__main__":
    create_tables()
