"""Seed a demo tenant with a handle, one draft and one published post."""
import logging

from writine.core.security import create_access_token
from writine.crud import crud_tenant
from writine.db.session import SessionLocal
from writine.models.post import POST_DRAFT, POST_PUBLISHED, Post
from writine.models.tenant import Tenant

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

DEMO_HANDLE = "demo"


def init_db() -> None:
    db = SessionLocal()
    try:
        tenant = crud_tenant.get_by_handle(db, DEMO_HANDLE)
        if not tenant:
            logger.info("Creating demo tenant '%s'", DEMO_HANDLE)
            tenant = Tenant(handle=DEMO_HANDLE, display_name="Demo Writer")
            db.add(tenant)
            db.flush()
            db.add_all([
                Post(
                    tenant_id=tenant.id,
                    slug="hello-world",
                    title="Hello, world",
                    excerpt="The first post on this blog.",
                    content="<p>Welcome to my blog.</p>",
                    reading_time=1,
                    status=POST_PUBLISHED,
                ),
                Post(
                    tenant_id=tenant.id,
                    slug="work-in-progress",
                    title="Work in progress",
                    content="<p>Not ready yet.</p>",
                    status=POST_DRAFT,
                ),
            ])
            db.commit()
            db.refresh(tenant)

        logger.info("Demo tenant id: %s", tenant.id)
        logger.info("Management API token: %s", create_access_token(tenant.id))
    finally:
        db.close()


if __name__ == "__main__":
    init_db()
