"""SQLite data store for FX Journal."""

import logging
import sqlite3
from datetime import date, datetime
from pathlib import Path
from typing import Optional

from fxjournal.analytics.windows import to_local
from fxjournal.models import AccountSnapshot, BacktestResult, Strategy, Trade

logger = logging.getLogger(__name__)


class DataStore:
    """SQLite-based data store for FX Journal.

    The store owns the canonical records. Engine functions receive plain
    model snapshots and hand back updated records, which are written here
    whole.
    """

    REQUIRED_TABLES = [
        "trades",
        "strategies",
        "backtest_results",
        "account",
    ]

    def __init__(self, db_path: Path):
        """Initialize the data store.

        Args:
            db_path: Path to the SQLite database file.
        """
        self.db_path = db_path
        self._ensure_db_dir()
        self._init_schema()

    def _ensure_db_dir(self) -> None:
        """Ensure the database directory exists."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

    def _get_connection(self) -> sqlite3.Connection:
        """Get a database connection."""
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def _init_schema(self) -> None:
        """Initialize database schema on first run."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()

            # Trades table
            cursor.execute("""
                CREATE TABLE IF NOT EXISTS trades (
                    id TEXT PRIMARY KEY,
                    pair TEXT NOT NULL,
                    direction TEXT NOT NULL,
                    entry_price REAL NOT NULL,
                    exit_price REAL,
                    lot_size REAL NOT NULL,
                    stop_loss REAL,
                    take_profit REAL,
                    entry_time TEXT NOT NULL,
                    exit_time TEXT,
                    status TEXT NOT NULL,
                    close_reason TEXT,
                    risk_reward_ratio TEXT,
                    notes TEXT NOT NULL DEFAULT ''
                )
            """)

            # Strategies table
            cursor.execute("""
                CREATE TABLE IF NOT EXISTS strategies (
                    id TEXT PRIMARY KEY,
                    name TEXT NOT NULL,
                    description TEXT NOT NULL DEFAULT '',
                    entry_rules TEXT NOT NULL DEFAULT '',
                    exit_rules TEXT NOT NULL DEFAULT '',
                    risk_per_trade TEXT NOT NULL DEFAULT '',
                    timeframe TEXT NOT NULL DEFAULT '',
                    is_verified INTEGER NOT NULL DEFAULT 0,
                    created_at TEXT NOT NULL
                )
            """)

            # Backtest results table, ordered by position within a strategy
            cursor.execute("""
                CREATE TABLE IF NOT EXISTS backtest_results (
                    id TEXT PRIMARY KEY,
                    strategy_id TEXT NOT NULL,
                    position INTEGER NOT NULL,
                    entry_price REAL NOT NULL,
                    exit_price REAL NOT NULL,
                    date TEXT NOT NULL,
                    outcome TEXT NOT NULL DEFAULT '',
                    pnl REAL,
                    notes TEXT NOT NULL DEFAULT '',
                    UNIQUE(strategy_id, position)
                )
            """)

            # Account table (single row)
            cursor.execute("""
                CREATE TABLE IF NOT EXISTS account (
                    id INTEGER PRIMARY KEY CHECK (id = 1),
                    account_number TEXT,
                    broker TEXT,
                    balance REAL,
                    currency TEXT NOT NULL DEFAULT 'USD',
                    leverage TEXT,
                    margin_level REAL,
                    equity REAL,
                    profit_loss REAL
                )
            """)

            conn.commit()
        finally:
            conn.close()

    def get_tables(self) -> list[str]:
        """Get list of all tables in the database."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                "SELECT name FROM sqlite_master WHERE type='table' AND name NOT LIKE 'sqlite_%'"
            )
            return [row["name"] for row in cursor.fetchall()]
        finally:
            conn.close()

    # ==================== Trades ====================

    def save_trade(self, trade: Trade) -> None:
        """Insert or replace a trade.

        Args:
            trade: Trade to save.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                """
                INSERT OR REPLACE INTO trades
                (id, pair, direction, entry_price, exit_price, lot_size, stop_loss,
                 take_profit, entry_time, exit_time, status, close_reason,
                 risk_reward_ratio, notes)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    trade.id,
                    trade.pair,
                    trade.direction,
                    trade.entry_price,
                    trade.exit_price,
                    trade.lot_size,
                    trade.stop_loss,
                    trade.take_profit,
                    trade.entry_time.isoformat(),
                    trade.exit_time.isoformat() if trade.exit_time else None,
                    trade.status,
                    trade.close_reason,
                    trade.risk_reward_ratio,
                    trade.notes,
                ),
            )
            conn.commit()
            logger.debug("Saved trade %s (%s)", trade.id, trade.status)
        finally:
            conn.close()

    @staticmethod
    def _row_to_trade(row: sqlite3.Row) -> Trade:
        return Trade(
            id=row["id"],
            pair=row["pair"],
            direction=row["direction"],
            entry_price=row["entry_price"],
            exit_price=row["exit_price"],
            lot_size=row["lot_size"],
            stop_loss=row["stop_loss"],
            take_profit=row["take_profit"],
            entry_time=datetime.fromisoformat(row["entry_time"]),
            exit_time=datetime.fromisoformat(row["exit_time"]) if row["exit_time"] else None,
            status=row["status"],
            close_reason=row["close_reason"],
            risk_reward_ratio=row["risk_reward_ratio"],
            notes=row["notes"],
        )

    def get_trades(self, status: Optional[str] = None) -> list[Trade]:
        """Get trades ordered by entry time (oldest first).

        Timestamps are compared as local time, so entries recorded with
        different UTC offsets still come back in chronological order.

        Args:
            status: Optional status filter (OPEN or CLOSED).

        Returns:
            List of trades.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            if status:
                cursor.execute(
                    "SELECT * FROM trades WHERE status = ? ORDER BY rowid", (status,)
                )
            else:
                cursor.execute("SELECT * FROM trades ORDER BY rowid")
            trades = [self._row_to_trade(row) for row in cursor.fetchall()]
        finally:
            conn.close()

        # Stable sort keeps insertion order for equal entry times
        trades.sort(key=lambda t: to_local(t.entry_time))
        return trades

    def get_trade(self, trade_id: str) -> Optional[Trade]:
        """Get a trade by ID.

        Args:
            trade_id: Trade ID.

        Returns:
            Trade if found, None otherwise.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute("SELECT * FROM trades WHERE id = ?", (trade_id,))
            row = cursor.fetchone()
            return self._row_to_trade(row) if row else None
        finally:
            conn.close()

    # ==================== Strategies ====================

    def save_strategy(self, strategy: Strategy) -> None:
        """Insert or replace a strategy together with its backtests.

        The strategy row and its backtest rows are written in one
        transaction.

        Args:
            strategy: Strategy to save.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                "SELECT created_at FROM strategies WHERE id = ?", (strategy.id,)
            )
            row = cursor.fetchone()
            created_at = row["created_at"] if row else datetime.now().isoformat()

            cursor.execute(
                """
                INSERT OR REPLACE INTO strategies
                (id, name, description, entry_rules, exit_rules, risk_per_trade,
                 timeframe, is_verified, created_at)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    strategy.id,
                    strategy.name,
                    strategy.description,
                    strategy.entry_rules,
                    strategy.exit_rules,
                    strategy.risk_per_trade,
                    strategy.timeframe,
                    1 if strategy.is_verified else 0,
                    created_at,
                ),
            )
            cursor.execute(
                "DELETE FROM backtest_results WHERE strategy_id = ?", (strategy.id,)
            )
            cursor.executemany(
                """
                INSERT INTO backtest_results
                (id, strategy_id, position, entry_price, exit_price, date,
                 outcome, pnl, notes)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                [
                    (
                        result.id,
                        strategy.id,
                        position,
                        result.entry_price,
                        result.exit_price,
                        result.date.isoformat(),
                        result.outcome,
                        result.pnl,
                        result.notes,
                    )
                    for position, result in enumerate(strategy.backtest_results)
                ],
            )
            conn.commit()
            logger.debug(
                "Saved strategy %s with %d backtests",
                strategy.id, strategy.backtest_count,
            )
        except sqlite3.Error:
            conn.rollback()
            raise
        finally:
            conn.close()

    def _load_strategy(self, cursor: sqlite3.Cursor, row: sqlite3.Row) -> Strategy:
        cursor.execute(
            """
            SELECT id, entry_price, exit_price, date, outcome, pnl, notes
            FROM backtest_results
            WHERE strategy_id = ?
            ORDER BY position
            """,
            (row["id"],),
        )
        results = tuple(
            BacktestResult(
                id=r["id"],
                entry_price=r["entry_price"],
                exit_price=r["exit_price"],
                date=date.fromisoformat(r["date"]),
                outcome=r["outcome"],
                pnl=r["pnl"],
                notes=r["notes"],
            )
            for r in cursor.fetchall()
        )
        return Strategy(
            id=row["id"],
            name=row["name"],
            description=row["description"],
            entry_rules=row["entry_rules"],
            exit_rules=row["exit_rules"],
            risk_per_trade=row["risk_per_trade"],
            timeframe=row["timeframe"],
            backtest_results=results,
            is_verified=bool(row["is_verified"]),
        )

    def get_strategies(self) -> list[Strategy]:
        """Get all strategies in creation order.

        Returns:
            List of strategies with their backtests.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute("SELECT * FROM strategies ORDER BY created_at, rowid")
            rows = cursor.fetchall()
            return [self._load_strategy(cursor, row) for row in rows]
        finally:
            conn.close()

    def get_strategy(self, strategy_id: str) -> Optional[Strategy]:
        """Get a strategy by ID.

        Args:
            strategy_id: Strategy ID.

        Returns:
            Strategy if found, None otherwise.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute("SELECT * FROM strategies WHERE id = ?", (strategy_id,))
            row = cursor.fetchone()
            return self._load_strategy(cursor, row) if row else None
        finally:
            conn.close()

    # ==================== Account ====================

    def save_account(self, account: AccountSnapshot) -> None:
        """Save the account details (replacing any previous details).

        Args:
            account: Account snapshot to save.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                """
                INSERT OR REPLACE INTO account
                (id, account_number, broker, balance, currency, leverage,
                 margin_level, equity, profit_loss)
                VALUES (1, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    account.account_number,
                    account.broker,
                    account.balance,
                    account.currency,
                    account.leverage,
                    account.margin_level,
                    account.equity,
                    account.profit_loss,
                ),
            )
            conn.commit()
        finally:
            conn.close()

    def get_account(self) -> Optional[AccountSnapshot]:
        """Get the saved account details.

        Returns:
            AccountSnapshot if saved, None otherwise.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute("SELECT * FROM account WHERE id = 1")
            row = cursor.fetchone()
            if row:
                return AccountSnapshot(
                    account_number=row["account_number"],
                    broker=row["broker"],
                    balance=row["balance"],
                    currency=row["currency"],
                    leverage=row["leverage"],
                    margin_level=row["margin_level"],
                    equity=row["equity"],
                    profit_loss=row["profit_loss"],
                )
            return None
        finally:
            conn.close()

    # ==================== Stats ====================

    def get_stats(self) -> dict:
        """Get database statistics.

        Returns:
            Dictionary with table record counts.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            stats = {}
            for table in self.REQUIRED_TABLES:
                cursor.execute(f"SELECT COUNT(*) as count FROM {table}")
                stats[table] = cursor.fetchone()["count"]
            return stats
        finally:
            conn.close()
