"""
Dependency Injection Container for SatStream.

Manages all service instances and their dependencies.
"""

from typing import Optional

from satstream.application.use_cases import (
    ApproveWithdrawal,
    AuditBalances,
    CreatePost,
    CreateUser,
    DenyWithdrawal,
    GetTransactionHistory,
    GetWalletSummary,
    GrantReward,
    ListPendingWithdrawals,
    ListReconciliationQueue,
    ReactToPost,
    ReconcileWithdrawal,
    RequestWithdrawal,
    SendTip,
    SetUserBan,
)
from satstream.config.settings import get_settings
from satstream.domain.exceptions import PaymentExecutorError
from satstream.domain.repositories.i_ledger_store import ILedgerUnitOfWork
from satstream.domain.services.i_event_publisher import IEventPublisher
from satstream.domain.services.i_payment_executor import IPaymentExecutor
from satstream.domain.services.i_user_locks import IUserLocks
from satstream.infrastructure.monitoring import get_logger
from satstream.infrastructure.payments import CircuitBreaker, LightningNodeClient
from satstream.infrastructure.persistence import (
    Database,
    SqlAlchemyUnitOfWork,
    UserLockRegistry,
)
from satstream.infrastructure.relay import BroadcastHub, RelayPublisher

logger = get_logger(__name__)


class DIContainer:
    """
    Dependency Injection Container.

    Manages singleton instances of infrastructure services. Use cases
    are cheap and built per call; each opens its own units of work.
    """

    def __init__(self):
        """Initialize container with None instances."""
        # Infrastructure
        self._database: Optional[Database] = None
        self._broadcast_hub: Optional[BroadcastHub] = None
        self._user_locks: Optional[IUserLocks] = None

        # Domain Services
        self._payment_executor: Optional[IPaymentExecutor] = None
        self._event_publisher: Optional[IEventPublisher] = None

    async def initialize(self) -> None:
        """Initialize all services and establish connections."""
        await self.database.connect()

        # Idempotent: only missing tables are created
        await self.database.create_schema()

    async def shutdown(self) -> None:
        """Cleanup resources and close connections."""
        if self._payment_executor:
            await self._payment_executor.close()

        if self._database:
            await self._database.disconnect()

    # Infrastructure Getters

    @property
    def database(self) -> Database:
        """Get database instance."""
        if self._database is None:
            self._database = Database(
                database_url=get_settings().DATABASE_URL,
                echo=get_settings().DATABASE_ECHO,
            )
        return self._database

    @property
    def broadcast_hub(self) -> BroadcastHub:
        """Get relay broadcast hub instance."""
        if self._broadcast_hub is None:
            self._broadcast_hub = BroadcastHub(
                max_clients=get_settings().RELAY_MAX_CLIENTS
            )
        return self._broadcast_hub

    @property
    def user_locks(self) -> IUserLocks:
        """Get per-user lock registry."""
        if self._user_locks is None:
            self._user_locks = UserLockRegistry()
        return self._user_locks

    def uow_factory(self) -> ILedgerUnitOfWork:
        """Create a new ledger unit of work."""
        return SqlAlchemyUnitOfWork(self.database)

    # Domain Service Getters

    @property
    def payment_executor(self) -> IPaymentExecutor:
        """Get Lightning node payment executor."""
        if self._payment_executor is None:
            settings = get_settings()
            self._payment_executor = LightningNodeClient(
                node_url=settings.PAYMENT_NODE_URL,
                network=settings.PAYMENT_NETWORK,
                api_key=settings.PAYMENT_NODE_API_KEY,
                total_timeout=settings.PAYMENT_TIMEOUT_SECONDS,
                circuit_breaker=CircuitBreaker(
                    "lightning_node",
                    failure_threshold=settings.CB_FAILURE_THRESHOLD,
                    recovery_timeout=settings.CB_TIMEOUT_SECONDS,
                    expected_exception=PaymentExecutorError,
                ),
            )
        return self._payment_executor

    @property
    def event_publisher(self) -> IEventPublisher:
        """Get relay event publisher."""
        if self._event_publisher is None:
            self._event_publisher = RelayPublisher(self.broadcast_hub)
        return self._event_publisher

    def override(
        self,
        payment_executor: Optional[IPaymentExecutor] = None,
        event_publisher: Optional[IEventPublisher] = None,
        database: Optional[Database] = None,
    ) -> None:
        """Replace services with test doubles."""
        if payment_executor is not None:
            self._payment_executor = payment_executor
        if event_publisher is not None:
            self._event_publisher = event_publisher
        if database is not None:
            self._database = database

    # Use Case Getters

    def get_send_tip(self) -> SendTip:
        return SendTip(self.uow_factory, self.user_locks, self.event_publisher)

    def get_react_to_post(self) -> ReactToPost:
        return ReactToPost(self.uow_factory, self.user_locks, self.event_publisher)

    def get_request_withdrawal(self) -> RequestWithdrawal:
        return RequestWithdrawal(
            self.uow_factory, self.user_locks, self.payment_executor
        )

    def get_approve_withdrawal(self) -> ApproveWithdrawal:
        return ApproveWithdrawal(
            self.uow_factory,
            self.user_locks,
            self.payment_executor,
            payment_timeout=get_settings().PAYMENT_TIMEOUT_SECONDS,
        )

    def get_deny_withdrawal(self) -> DenyWithdrawal:
        return DenyWithdrawal(self.uow_factory)

    def get_reconcile_withdrawal(self) -> ReconcileWithdrawal:
        return ReconcileWithdrawal(self.uow_factory, self.user_locks)

    def get_list_pending_withdrawals(self) -> ListPendingWithdrawals:
        return ListPendingWithdrawals(self.uow_factory)

    def get_list_reconciliation_queue(self) -> ListReconciliationQueue:
        return ListReconciliationQueue(
            self.uow_factory,
            stale_after_minutes=get_settings().WITHDRAWAL_STALE_AFTER_MINUTES,
        )

    def get_transaction_history(self) -> GetTransactionHistory:
        return GetTransactionHistory(self.uow_factory)

    def get_wallet_summary(self) -> GetWalletSummary:
        return GetWalletSummary(self.uow_factory, self.payment_executor)

    def get_grant_reward(self) -> GrantReward:
        return GrantReward(self.uow_factory, self.user_locks)

    def get_set_user_ban(self) -> SetUserBan:
        return SetUserBan(self.uow_factory)

    def get_audit_balances(self) -> AuditBalances:
        return AuditBalances(self.uow_factory)

    def get_create_user(self) -> CreateUser:
        return CreateUser(self.uow_factory)

    def get_create_post(self) -> CreatePost:
        return CreatePost(self.uow_factory)


# Global container instance
_container: Optional[DIContainer] = None


def get_container() -> DIContainer:
    """Get global DI container instance."""
    global _container
    if _container is None:
        _container = DIContainer()
    return _container


async def initialize_container() -> DIContainer:
    """Initialize and return DI container."""
    container = get_container()
    await container.initialize()
    logger.info("DI container initialized")
    return container


async def shutdown_container() -> None:
    """Shutdown DI container."""
    container = get_container()
    await container.shutdown()


def reset_container() -> None:
    """Drop the global container (for testing)."""
    global _container
    _container = None
