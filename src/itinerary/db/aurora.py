"""Aurora PostgreSQL client: connection management and location queries."""

import json
import logging
from typing import Any

import boto3
import psycopg
from psycopg import sql
from psycopg.rows import dict_row

from itinerary.config import Config
from itinerary.db.seed import STARTER_ITINERARY
from itinerary.errors import LocationNotFoundError, StorageError
from itinerary.models import Location, LocationCreate, LocationUpdate

logger = logging.getLogger(__name__)

# Serialises schema creation and seeding across concurrent cold starts.
_INIT_LOCK_KEY = 4_815_162_342

_CREATE_TABLE_SQL = """
    CREATE TABLE IF NOT EXISTS locations (
        id SERIAL PRIMARY KEY,
        name VARCHAR(255) NOT NULL,
        lat DOUBLE PRECISION NOT NULL,
        lng DOUBLE PRECISION NOT NULL,
        day VARCHAR(10) NOT NULL,
        time VARCHAR(50) NOT NULL,
        description TEXT NOT NULL,
        created_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
        updated_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
        CONSTRAINT chk_locations_day CHECK (day IN ('day1', 'day2', 'day3', 'day4', 'day5')),
        CONSTRAINT chk_locations_lat CHECK (lat BETWEEN -90 AND 90),
        CONSTRAINT chk_locations_lng CHECK (lng BETWEEN -180 AND 180)
    );
    CREATE INDEX IF NOT EXISTS idx_locations_day ON locations (day)
"""

_LIST_SQL = """
    SELECT id, name, lat, lng, day, time, description, created_at, updated_at
    FROM locations
    ORDER BY
        CASE day
            WHEN 'day1' THEN 1
            WHEN 'day2' THEN 2
            WHEN 'day3' THEN 3
            WHEN 'day4' THEN 4
            WHEN 'day5' THEN 5
            ELSE 6
        END,
        id
"""

_INSERT_SQL = """
    INSERT INTO locations (name, lat, lng, day, time, description, created_at, updated_at)
    VALUES (%s, %s, %s, %s, %s, %s, NOW(), NOW())
    RETURNING id, name, lat, lng, day, time, description, created_at, updated_at
"""

_DELETE_SQL = "DELETE FROM locations WHERE id = %s RETURNING id"

# updated_at must advance on every write, even within the same clock tick.
_BUMP_UPDATED_AT = sql.SQL("updated_at = GREATEST(clock_timestamp(), updated_at + INTERVAL '1 microsecond')")

_MUTABLE_COLUMNS = ("name", "lat", "lng", "day", "time", "description")


def _insert_params(location: LocationCreate) -> tuple[Any, ...]:
    return (location.name, location.lat, location.lng, location.day, location.time, location.description)


class AuroraClient:
    def __init__(self, config: Config) -> None:
        self._config = config
        self._conn: psycopg.Connection | None = None
        self._secret_cache: dict[str, str] | None = None
        self._initialized = False

    def _get_credentials(self) -> dict[str, str]:
        if self._config.aurora_secret_arn:
            if self._secret_cache is None:
                client = boto3.client("secretsmanager", region_name=self._config.aws_region)
                secret = client.get_secret_value(SecretId=self._config.aurora_secret_arn)
                self._secret_cache = json.loads(secret["SecretString"])
            return self._secret_cache
        return {
            "host": self._config.aurora_host,
            "port": str(self._config.aurora_port),
            "dbname": self._config.aurora_database,
            "user": self._config.aurora_user,
            "password": self._config.aurora_password,
        }

    def connect(self) -> None:
        creds = self._get_credentials()
        try:
            self._conn = psycopg.connect(
                host=creds.get("host", self._config.aurora_host),
                port=int(creds.get("port", self._config.aurora_port)),
                dbname=creds.get("dbname", self._config.aurora_database),
                user=creds.get("username", creds.get("user", self._config.aurora_user)),
                password=creds.get("password", self._config.aurora_password),
                autocommit=True,
            )
        except psycopg.Error as e:
            raise StorageError(f"Could not connect to Aurora: {e}") from e

    def ensure_connected(self) -> None:
        if self._conn is None or self._conn.closed:
            self.connect()

    def disconnect(self) -> None:
        if self._conn and not self._conn.closed:
            self._conn.close()
        self._conn = None

    def _require_connection(self) -> psycopg.Connection:
        """Return the active connection or raise if not connected."""
        if self._conn is None or self._conn.closed:
            raise StorageError("AuroraClient is not connected. Call connect() first.")
        return self._conn

    def health_check(self) -> bool:
        try:
            conn = self._require_connection()
            with conn.cursor() as cur:
                cur.execute("SELECT 1")
            return True
        except Exception:
            return False

    def initialize(self) -> None:
        """Create the locations table and seed it if empty.

        Runs at most once per client. The advisory lock makes concurrent
        first requests from separate containers wait for each other, so the
        starter rows are inserted exactly once.
        """
        if self._initialized:
            return

        conn = self._require_connection()
        try:
            with conn.transaction():
                with conn.cursor() as cur:
                    cur.execute("SELECT pg_advisory_xact_lock(%s)", (_INIT_LOCK_KEY,))
                    cur.execute(_CREATE_TABLE_SQL)
                    cur.execute("SELECT COUNT(*) FROM locations")
                    row = cur.fetchone()
                    if row is not None and row[0] == 0:
                        logger.info("Seeding locations table with %d starter stops", len(STARTER_ITINERARY))
                        cur.executemany(_INSERT_SQL, [_insert_params(loc) for loc in STARTER_ITINERARY])
        except psycopg.Error as e:
            raise StorageError(f"Schema initialization failed: {e}") from e

        self._initialized = True

    def _fetch(self, query: Any, params: tuple[Any, ...], action: str) -> list[dict[str, Any]]:
        conn = self._require_connection()
        try:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(query, params)
                return cur.fetchall()
        except psycopg.Error as e:
            raise StorageError(f"{action} failed: {e}") from e

    def list_locations(self) -> list[Location]:
        rows = self._fetch(_LIST_SQL, (), "Listing locations")
        return [Location.model_validate(row) for row in rows]

    def create_location(self, location: LocationCreate) -> Location:
        rows = self._fetch(_INSERT_SQL, _insert_params(location), "Creating location")
        return Location.model_validate(rows[0])

    def update_location(self, location_id: int, update: LocationUpdate) -> Location:
        changes = update.changes()
        columns = [col for col in _MUTABLE_COLUMNS if col in changes]
        assignments = [sql.SQL("{} = {}").format(sql.Identifier(col), sql.Placeholder()) for col in columns]
        assignments.append(_BUMP_UPDATED_AT)

        query = sql.SQL(
            "UPDATE locations SET {} WHERE id = {} "
            "RETURNING id, name, lat, lng, day, time, description, created_at, updated_at"
        ).format(sql.SQL(", ").join(assignments), sql.Placeholder())
        params = tuple(changes[col] for col in columns) + (location_id,)

        rows = self._fetch(query, params, f"Updating location {location_id}")
        if not rows:
            raise LocationNotFoundError(f"Location {location_id} does not exist")
        return Location.model_validate(rows[0])

    def delete_location(self, location_id: int) -> None:
        rows = self._fetch(_DELETE_SQL, (location_id,), f"Deleting location {location_id}")
        if not rows:
            raise LocationNotFoundError(f"Location {location_id} does not exist")

    def __enter__(self) -> "AuroraClient":
        self.connect()
        return self

    def __exit__(self, *args: object) -> None:
        self.disconnect()
