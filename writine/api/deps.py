from typing import Generator, Optional
from uuid import UUID

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from writine.config import settings
from writine.core.security import decode_access_token
from writine.crud import crud_tenant
from writine.db.session import SessionLocal
from writine.models.tenant import Tenant
from writine.services.dns_verifier import DNSVerifier

bearer_scheme = HTTPBearer(auto_error=False)


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_dns_verifier() -> DNSVerifier:
    return DNSVerifier.from_settings(settings)


def get_current_tenant(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> Tenant:
    unauthorized = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    if credentials is None:
        raise unauthorized

    subject = decode_access_token(credentials.credentials)
    if subject is None:
        raise unauthorized
    try:
        tenant_id = UUID(subject)
    except ValueError:
        raise unauthorized

    tenant = crud_tenant.get(db, tenant_id)
    if tenant is None:
        raise unauthorized
    return tenant
