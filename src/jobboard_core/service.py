"""Dashboard orchestration: session → account → role → aggregated bundle."""

import logging
from typing import Any, Mapping, Optional

from jobboard_core.cancellation import CancelToken
from jobboard_core.config import CoreSettings
from jobboard_core.dashboard import DashboardAggregator, synthesize_account
from jobboard_core.errors import MalformedRecordError, NoActivePrincipal, OperationCancelled, StoreError
from jobboard_core.models.dashboard import DashboardBundle, Principal
from jobboard_core.models.entities import Account, CanonicalRole
from jobboard_core.models.raw import RawRecord
from jobboard_core.normalize import RecordNormalizer
from jobboard_core.roles import RoleResolver, normalize_role_value
from jobboard_core.session import SessionProvider
from jobboard_core.sources.fallback import Clock, utc_now
from jobboard_core.store.base import DocumentStore

logger = logging.getLogger(__name__)


class DashboardService:
    """
    Entry points consumed by the presentation layer.
    The store and session are injected; nothing is initialized globally.
    """

    def __init__(
        self,
        store: DocumentStore,
        session: Optional[SessionProvider] = None,
        settings: Optional[CoreSettings] = None,
        *,
        clock: Clock = utc_now,
    ):
        self.store = store
        self.session = session
        self.settings = settings or CoreSettings()
        self.role_resolver = RoleResolver(default=self.settings.default_role)
        self.normalizer = RecordNormalizer(self.role_resolver)
        self.aggregator = DashboardAggregator(store, self.settings, self.normalizer, clock=clock)

    def resolve_role(
        self,
        record: "RawRecord | Mapping[str, Any] | None",
        hint: Optional[str] = None,
    ) -> CanonicalRole:
        return self.role_resolver.resolve(record, hint)

    async def build_dashboard(
        self,
        principal: Principal,
        role: CanonicalRole,
        token: Optional[CancelToken] = None,
        account: Optional[Account] = None,
    ) -> DashboardBundle:
        return await self.aggregator.build(principal, role, token, account=account)

    async def load_dashboard(
        self,
        hint: Optional[str] = None,
        token: Optional[CancelToken] = None,
    ) -> DashboardBundle:
        """
        Full load for the signed-in principal: the account record is fetched once,
        its role resolved, and the role's dashboard built.
        Raises NoActivePrincipal when nobody is signed in. A failed account lookup
        falls back to the session identity instead of failing the load.
        """
        if self.session is None:
            raise NoActivePrincipal("no session provider configured")
        principal = self.session.current_principal()
        if principal is None:
            raise NoActivePrincipal("no authenticated principal")

        try:
            record = await self.aggregator.query.call(self.session.get_account_record(principal.id), token)
        except OperationCancelled:
            logger.info("Dashboard for %s cancelled during account lookup", principal.id)
            account = self._synthesized(principal, hint)
            return self.aggregator.cancelled_bundle(account, account.role)
        except StoreError as e:
            logger.warning("Account lookup for %s failed (%s); using session identity", principal.id, e.kind.value)
            account = self._synthesized(principal, hint)
        else:
            account = self._account_for(principal, record, hint)
        logger.info("Loading %s dashboard for %s", account.role.value, principal.id)
        return await self.build_dashboard(principal, account.role, token, account=account)

    def _account_for(self, principal: Principal, record: Optional[RawRecord], hint: Optional[str]) -> Account:
        if record is not None:
            try:
                return self.normalizer.normalize_account(
                    {"id": principal.id, **record.data}, session_hint=hint
                )
            except MalformedRecordError as e:
                logger.warning("Account record for %s is malformed: %s", principal.id, e)
        else:
            logger.warning("No account record for %s; using session identity", principal.id)
        return self._synthesized(principal, hint)

    def _synthesized(self, principal: Principal, hint: Optional[str]) -> Account:
        role = normalize_role_value(hint) or self.settings.default_role
        return synthesize_account(principal, role)


async def build_dashboard(
    store: DocumentStore,
    principal: Principal,
    role: CanonicalRole,
    *,
    settings: Optional[CoreSettings] = None,
    token: Optional[CancelToken] = None,
) -> DashboardBundle:
    """Build one role's dashboard for principal against store."""
    return await DashboardService(store, settings=settings).build_dashboard(principal, role, token)
