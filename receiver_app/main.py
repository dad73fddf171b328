"""Minimal receiver for server-side tracking events (PostgreSQL).

Run locally:
  uvicorn receiver_app.main:app --reload --port 8100
"""

from __future__ import annotations

import os
from datetime import datetime

from fastapi import Depends, FastAPI, Header, HTTPException, Query
from pydantic import BaseModel, Field
import psycopg
from psycopg.rows import dict_row
from psycopg.types.json import Jsonb

DATABASE_URL = os.getenv("DATABASE_URL")
RECEIVER_TOKEN = os.getenv("TRACKING_RECEIVER_TOKEN")

app = FastAPI(title="Tracking Event Receiver", version="1.0.0")


class TrackedItem(BaseModel):
    item_id: str = Field(min_length=1)
    item_name: str
    item_category: str | None = None
    item_variant: str | None = None
    price: float = Field(ge=0.0)
    quantity: int = Field(default=1, ge=1)


class TrackedEvent(BaseModel):
    event_name: str = Field(min_length=1)
    event_id: str = Field(min_length=1)
    ts: datetime
    items: list[TrackedItem] = Field(default_factory=list)
    value: float = Field(default=0.0, ge=0.0)
    currency: str = Field(default="AED", min_length=3, max_length=3)
    transaction_id: str | None = None
    shipping: float | None = None
    coupon: str | None = None


class TrackedEventOut(TrackedEvent):
    id: int
    received_at: datetime


def _require_database_url() -> str:
    if not DATABASE_URL:
        raise RuntimeError("DATABASE_URL is required for receiver_app")
    return DATABASE_URL


def _conn() -> psycopg.Connection:
    return psycopg.connect(_require_database_url(), row_factory=dict_row)


def _init_db() -> None:
    with _conn() as conn:
        with conn.cursor() as cur:
            cur.execute(
                """
                create table if not exists tracking_events (
                  id bigserial primary key,
                  event_id text not null unique,
                  event_name text not null,
                  ts timestamptz not null,
                  items jsonb not null default '[]'::jsonb,
                  value double precision not null,
                  currency text not null,
                  transaction_id text null,
                  shipping double precision null,
                  coupon text null,
                  received_at timestamptz not null default now()
                )
                """
            )
            cur.execute(
                "create index if not exists idx_tracking_events_name on tracking_events(event_name)"
            )
            cur.execute(
                "create index if not exists idx_tracking_events_received_at on tracking_events(received_at)"
            )
        conn.commit()


@app.on_event("startup")
def startup() -> None:
    _init_db()


def _verify_token(x_webhook_token: str | None = Header(default=None)) -> None:
    if RECEIVER_TOKEN and x_webhook_token != RECEIVER_TOKEN:
        raise HTTPException(status_code=401, detail="invalid webhook token")


@app.get("/health")
def health() -> dict[str, bool]:
    return {"ok": True}


@app.post("/events")
def ingest_event(
    event: TrackedEvent,
    _: None = Depends(_verify_token),
) -> dict[str, int]:
    with _conn() as conn:
        with conn.cursor() as cur:
            # Retried deliveries carry the same event_id and are stored once.
            cur.execute(
                """
                insert into tracking_events (
                  event_id, event_name, ts, items, value, currency, transaction_id, shipping, coupon
                ) values (%s, %s, %s, %s, %s, %s, %s, %s, %s)
                on conflict (event_id) do update set event_id = excluded.event_id
                returning id
                """,
                (
                    event.event_id,
                    event.event_name,
                    event.ts,
                    Jsonb([item.model_dump() for item in event.items]),
                    event.value,
                    event.currency,
                    event.transaction_id,
                    event.shipping,
                    event.coupon,
                ),
            )
            row = cur.fetchone()
        conn.commit()

    event_id = int(row["id"]) if row and row.get("id") is not None else 0
    return {"id": event_id}


@app.get("/events/recent", response_model=list[TrackedEventOut])
def recent_events(
    limit: int = Query(default=50, ge=1, le=500),
    event_name: str | None = Query(default=None),
    _: None = Depends(_verify_token),
) -> list[TrackedEventOut]:
    with _conn() as conn:
        with conn.cursor() as cur:
            cur.execute(
                """
                select id, event_id, event_name, ts, items, value, currency,
                       transaction_id, shipping, coupon, received_at
                from tracking_events
                where %s::text is null or event_name = %s
                order by id desc
                limit %s
                """,
                (event_name, event_name, limit),
            )
            rows = cur.fetchall()

    return [_row_to_event(row) for row in rows]


def _row_to_event(row: dict) -> TrackedEventOut:
    return TrackedEventOut(
        id=int(row["id"]),
        event_id=row["event_id"],
        event_name=row["event_name"],
        ts=_as_datetime(row["ts"]),
        items=[TrackedItem.model_validate(item) for item in row["items"] or []],
        value=float(row["value"]),
        currency=row["currency"],
        transaction_id=row["transaction_id"],
        shipping=row["shipping"],
        coupon=row["coupon"],
        received_at=_as_datetime(row["received_at"]),
    )


def _as_datetime(value: datetime | str) -> datetime:
    if isinstance(value, datetime):
        return value
    if isinstance(value, str):
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    raise ValueError("Invalid datetime value")
