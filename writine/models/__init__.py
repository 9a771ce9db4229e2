from writine.db.base_class import Base
from writine.models.tenant import Tenant
from writine.models.domain_claim import DomainClaim
from writine.models.post import Post
from writine.models.subscription import Subscription
