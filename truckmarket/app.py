from __future__ import annotations

import logging
import os

from fastapi import Depends, FastAPI, HTTPException, Query, Request
from fastapi.responses import JSONResponse
from starlette.middleware.sessions import SessionMiddleware

from .auth import users
from .auth.dependencies import require_driver, require_user
from .auth.models import (
    ChangePasswordRequest,
    LoginRequest,
    ProfileUpdateRequest,
    RegisterRequest,
)
from .cargo.composer import ERROR_MESSAGE
from .cargo.extractor import extract_filters
from .cargo.models import (
    CargoQuery,
    CargoRecommendRequest,
    ExtractedFilters,
    RecommendationResult,
)
from .cargo.pipeline import recommend_cargo
from .listings.models import Listing, ListingCreate, ListingPage, ListingUpdate, TruckType
from .listings.store import SORT_FIELDS, ListingStore, get_listing_store
from .llm.groq_client import TextGenerator, get_text_generator

logger = logging.getLogger(__name__)

app = FastAPI(title="HackTruck Marketplace API", version="1.0.0")
app.add_middleware(
    SessionMiddleware,
    secret_key=os.environ.get("SESSION_SECRET", "hacktruck-secret-change-in-production"),
)


def listing_store() -> ListingStore:
    return get_listing_store()


# ── Public endpoints ─────────────────────────────────────────────────────


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/metadata")
def metadata(store: ListingStore = Depends(listing_store)) -> dict:
    listings = store.list_all()
    return {
        "truckTypes": [t.value for t in TruckType],
        "origins": sorted({l.origin for l in listings}),
        "destinations": sorted({l.destination for l in listings}),
    }


# ── Auth endpoints ───────────────────────────────────────────────────────


@app.post("/api/auth/register", status_code=201)
def register(body: RegisterRequest, request: Request) -> dict:
    user = users.register(body.email, body.password, body.role, body.name)
    if not user:
        raise HTTPException(status_code=400, detail="Email already exists")
    request.session["user"] = user
    return {"status": "ok", "user": user}


@app.post("/api/auth/login")
def login(body: LoginRequest, request: Request) -> dict:
    user = users.authenticate(body.email, body.password)
    if not user:
        raise HTTPException(status_code=401, detail="Invalid credentials")
    request.session["user"] = user
    return {"status": "ok", "user": user}


@app.post("/api/auth/logout")
def logout(request: Request) -> dict:
    request.session.clear()
    return {"status": "logged_out"}


@app.get("/api/auth/me")
def auth_me(user: dict = Depends(require_user)) -> dict:
    return user


@app.post("/api/auth/change-password")
def change_password(
    body: ChangePasswordRequest,
    user: dict = Depends(require_user),
) -> dict:
    if not users.change_password(user["id"], body.currentPassword, body.newPassword):
        raise HTTPException(status_code=401, detail="Current password is incorrect")
    return {"message": "Password changed successfully"}


@app.post("/api/auth/profile/update")
def update_profile(
    body: ProfileUpdateRequest,
    request: Request,
    user: dict = Depends(require_user),
) -> dict:
    try:
        updated = users.update_profile(user["id"], name=body.name, email=body.email)
    except KeyError:
        raise HTTPException(status_code=404, detail="User not found")
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    request.session["user"] = updated
    return updated


# ── Listing endpoints ────────────────────────────────────────────────────


@app.get("/api/posts", response_model=ListingPage)
def list_posts(
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=100),
    search: str | None = None,
    truck_type: TruckType | None = Query(default=None, alias="truckType"),
    sort_by: str = Query(default="createdAt", alias="sortBy"),
    order: str = Query(default="DESC", pattern="(?i)^(asc|desc)$"),
    user: dict = Depends(require_user),
    store: ListingStore = Depends(listing_store),
) -> ListingPage:
    if sort_by not in SORT_FIELDS:
        raise HTTPException(status_code=422, detail=f"Cannot sort by {sort_by}")
    return store.query(page, limit, search, truck_type, sort_by, order)


@app.get("/api/posts/driver", response_model=list[Listing])
def list_driver_posts(
    user: dict = Depends(require_driver),
    store: ListingStore = Depends(listing_store),
) -> list[Listing]:
    return store.list_by_driver(user["id"])


@app.post("/api/posts", response_model=Listing, status_code=201)
def create_post(
    body: ListingCreate,
    user: dict = Depends(require_driver),
    store: ListingStore = Depends(listing_store),
) -> Listing:
    return store.create(body, driver_id=user["id"])


@app.put("/api/posts/{listing_id}", response_model=Listing)
def update_post(
    listing_id: str,
    body: ListingUpdate,
    user: dict = Depends(require_driver),
    store: ListingStore = Depends(listing_store),
) -> Listing:
    listing = store.update(listing_id, user["id"], body)
    if listing is None:
        raise HTTPException(status_code=404, detail="Post not found")
    return listing


@app.delete("/api/posts/{listing_id}")
def delete_post(
    listing_id: str,
    user: dict = Depends(require_driver),
    store: ListingStore = Depends(listing_store),
) -> dict:
    if not store.delete(listing_id, user["id"]):
        raise HTTPException(status_code=404, detail="Post not found")
    return {"message": "Post deleted"}


# ── Cargo assistant ──────────────────────────────────────────────────────


def _recommend(
    body: CargoRecommendRequest,
    store: ListingStore,
    generator: TextGenerator,
) -> RecommendationResult | JSONResponse:
    try:
        return recommend_cargo(body.query, store, generator, filters=body.filters)
    except Exception:
        logger.exception("Cargo recommendation failed for query %r", body.query)
        return JSONResponse(
            status_code=500,
            content={"recommendation": ERROR_MESSAGE, "posts": []},
        )


@app.post("/cargo/recommend", response_model=RecommendationResult)
def cargo_recommend(
    body: CargoRecommendRequest,
    store: ListingStore = Depends(listing_store),
    generator: TextGenerator = Depends(get_text_generator),
) -> RecommendationResult | JSONResponse:
    return _recommend(body, store, generator)


@app.post("/api/cargo/recommend", response_model=RecommendationResult)
def api_cargo_recommend(
    body: CargoRecommendRequest,
    user: dict = Depends(require_user),
    store: ListingStore = Depends(listing_store),
    generator: TextGenerator = Depends(get_text_generator),
) -> RecommendationResult | JSONResponse:
    return _recommend(body, store, generator)


@app.post("/cargo/extract", response_model=ExtractedFilters)
def cargo_extract(body: CargoQuery) -> ExtractedFilters:
    return extract_filters(body.query)
