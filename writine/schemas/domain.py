from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel


class DomainCreate(BaseModel):
    hostname: str


class DNSRecord(BaseModel):
    type: str
    name: str
    value: str
    note: Optional[str] = None


class DomainInfo(BaseModel):
    id: UUID
    hostname: str
    status: str  # pending, verified, failed
    created_at: Optional[datetime] = None
    verified_at: Optional[datetime] = None
    last_checked_at: Optional[datetime] = None
    dns_instructions: List[DNSRecord] = []


class DomainVerifyResult(BaseModel):
    hostname: str
    status: str
    verified: bool
    message: str
    dns_instructions: List[DNSRecord] = []
