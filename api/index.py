from functools import lru_cache
import json
import logging
import os
from pathlib import Path
import sys

from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from pydantic import Field

# Ensure local src package is importable in serverless runtime.
ROOT = Path(__file__).resolve().parent.parent
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from bean_variants import pricing  # noqa: E402
from bean_variants.cart import Cart, CartItem  # noqa: E402
from bean_variants.checkout import OrderSummary, summarize_order  # noqa: E402
from bean_variants.core import fetch_product  # noqa: E402
from bean_variants.exceptions import (  # noqa: E402
    NoMatchingVariantError,
    OutOfStockError,
    PromotionError,
)
from bean_variants.localization import Translator  # noqa: E402
from bean_variants.notifications import Toast, ToastQueue  # noqa: E402
from bean_variants.promotions import Promotion, find_promotion  # noqa: E402
from bean_variants.resolver import FacetOptions  # noqa: E402
from bean_variants.schema import PricedItem, Product, SelectionState, Variant, WireModel  # noqa: E402
from bean_variants.shipping import ShippingQuote, calculate_shipping  # noqa: E402
from bean_variants.stock import is_out_of_stock  # noqa: E402
from bean_variants.storefront import ProductView  # noqa: E402
from bean_variants.tracking import EventSender, TrackingConfig, add_to_cart_event  # noqa: E402

app = FastAPI(title="bean-variants API", version="1.0.0")
logger = logging.getLogger(__name__)
EVENT_SENDER = EventSender(TrackingConfig.from_env())

raw_origins = os.getenv("FRONTEND_ORIGINS", "*")
allow_origins = [origin.strip() for origin in raw_origins.split(",") if origin.strip()]
DEFAULT_LANGUAGE = os.getenv("DEFAULT_LANGUAGE", "en")
CATALOG_SOURCE = os.getenv("BEAN_VARIANTS_SOURCE")
PROMOTIONS_PATH = os.getenv("PROMOTIONS_PATH")

app.add_middleware(
    CORSMiddleware,
    allow_origins=allow_origins,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
def health() -> dict[str, bool]:
    return {"ok": True}


class ProductRequest(WireModel):
    product_id: str | None = None
    product: Product | None = None
    language: str | None = None


class ResolveRequest(ProductRequest):
    selection: SelectionState = Field(default_factory=SelectionState)
    quantity: int = 1


class ResolveResponse(WireModel):
    product_id: str
    selection: SelectionState
    method: str
    variant: Variant | None = None
    options: FacetOptions
    price: float
    original_price: float | None = None
    discount_percent: int = 0
    quantity: int
    out_of_stock: bool
    can_purchase: bool
    messages: list[Toast] = Field(default_factory=list)


class PriceResponse(WireModel):
    price: float
    original_price: float | None = None
    discount_percent: int = 0
    out_of_stock: bool


class ShippingRequest(WireModel):
    order_total: float


class AddToCartRequest(ResolveRequest):
    cart: Cart = Field(default_factory=Cart)


class AddToCartResponse(WireModel):
    cart: Cart
    line: CartItem
    total_items: int
    total_price: float
    messages: list[Toast] = Field(default_factory=list)


class CartSummaryRequest(WireModel):
    cart: Cart
    promotion_code: str | None = None


class ProductOptionsResponse(WireModel):
    product_id: str
    options: FacetOptions
    selection: SelectionState


@lru_cache(maxsize=1)
def _load_promotions() -> tuple[Promotion, ...]:
    if not PROMOTIONS_PATH:
        return ()
    data = json.loads(Path(PROMOTIONS_PATH).read_text(encoding="utf-8"))
    return tuple(Promotion.model_validate(item) for item in data)


def _load_product(body: ProductRequest) -> Product:
    if body.product is not None:
        return body.product
    if not body.product_id:
        raise HTTPException(status_code=400, detail="productId or product is required")
    result = fetch_product(body.product_id, source=CATALOG_SOURCE)
    if not result.ok:
        # Surface an explicit unavailable state instead of placeholder data.
        raise HTTPException(status_code=503, detail="catalog_unavailable")
    return result.product


def _build_view(body: ResolveRequest, toasts: ToastQueue) -> ProductView:
    view = ProductView(
        _load_product(body),
        translator=Translator(body.language or DEFAULT_LANGUAGE),
        notifier=toasts,
    )
    for facet in ("weight", "beans", "additions"):
        value = body.selection.get(facet)
        if value:
            view.select(facet, value)
    view.set_quantity(body.quantity)
    return view


def _resolve_response(view: ProductView, toasts: ToastQueue) -> ResolveResponse:
    return ResolveResponse(
        product_id=view.product.id,
        selection=view.selection,
        method=view.resolution.method,
        variant=view.variant,
        options=view.resolution.options,
        price=round(view.current_price, 2),
        original_price=view.original_price,
        discount_percent=view.discount_percent,
        quantity=view.quantity,
        out_of_stock=view.is_out_of_stock,
        can_purchase=view.can_purchase,
        messages=toasts.drain(),
    )


@app.get("/products/{product_id}/options", response_model=ProductOptionsResponse)
def product_options(
    product_id: str,
    language: str | None = Query(default=None),
) -> ProductOptionsResponse:
    try:
        view = ProductView(
            _load_product(ProductRequest(product_id=product_id)),
            translator=Translator(language or DEFAULT_LANGUAGE),
        )
        return ProductOptionsResponse(
            product_id=view.product.id,
            options=view.resolution.options,
            selection=view.selection,
        )
    except HTTPException:
        raise
    except Exception as exc:
        logger.exception("product options failed")
        raise HTTPException(status_code=500, detail="internal_error") from exc


@app.post("/resolve", response_model=ResolveResponse)
def resolve_selection(body: ResolveRequest) -> ResolveResponse:
    try:
        toasts = ToastQueue()
        view = _build_view(body, toasts)
        return _resolve_response(view, toasts)
    except HTTPException:
        raise
    except Exception as exc:
        logger.exception("resolve failed")
        raise HTTPException(status_code=500, detail="internal_error") from exc


@app.post("/price", response_model=PriceResponse)
def price_item(item: PricedItem) -> PriceResponse:
    return PriceResponse(
        price=round(pricing.current_price(item), 2),
        original_price=pricing.original_price(item),
        discount_percent=pricing.discount_percent_label(item),
        out_of_stock=is_out_of_stock(item),
    )


@app.post("/shipping/calculate", response_model=ShippingQuote)
def shipping_calculate(body: ShippingRequest) -> ShippingQuote:
    try:
        return calculate_shipping(body.order_total)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


@app.get("/shipping/calculate", response_model=ShippingQuote)
def shipping_calculate_query(order_total: float = Query(default=0.0, alias="orderTotal")) -> ShippingQuote:
    return shipping_calculate(ShippingRequest(order_total=order_total))


@app.post("/cart/items", response_model=AddToCartResponse)
def add_to_cart(body: AddToCartRequest) -> AddToCartResponse:
    try:
        toasts = ToastQueue()
        view = _build_view(body, toasts)
        cart = body.cart
        line = view.add_to_cart(cart)
        EVENT_SENDER.send(add_to_cart_event(line))
        return AddToCartResponse(
            cart=cart,
            line=line,
            total_items=cart.total_items,
            total_price=round(cart.total_price, 2),
            messages=toasts.drain(),
        )
    except NoMatchingVariantError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except OutOfStockError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    except HTTPException:
        raise
    except Exception as exc:
        logger.exception("add to cart failed")
        raise HTTPException(status_code=500, detail="internal_error") from exc


@app.post("/cart/summary", response_model=OrderSummary)
def cart_summary(body: CartSummaryRequest) -> OrderSummary:
    try:
        promotion = None
        if body.promotion_code:
            promotion = find_promotion(body.promotion_code, list(_load_promotions()))
            if promotion is None:
                raise HTTPException(status_code=404, detail="promotion not found")
        return summarize_order(body.cart, promotion=promotion)
    except PromotionError as exc:
        raise HTTPException(status_code=400, detail={"reason": exc.reason, "message": str(exc)}) from exc
    except HTTPException:
        raise
    except Exception as exc:
        logger.exception("cart summary failed")
        raise HTTPException(status_code=500, detail="internal_error") from exc
