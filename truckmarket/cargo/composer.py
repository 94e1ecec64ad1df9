from __future__ import annotations

import logging
from typing import Sequence

from ..listings.models import Listing
from ..llm.groq_client import TextGenerator
from .models import RecommendationResult

logger = logging.getLogger(__name__)

NO_MATCH_MESSAGE = (
    "Tidak ada cargo yang memenuhi kriteria Anda. Coba ubah kriteria pencarian."
)
ERROR_MESSAGE = "Terjadi kesalahan saat mencari rekomendasi."

_UNKNOWN = "Tidak Diketahui"
_NONE = "Tidak ada"


def format_rupiah(price: int) -> str:
    """``2500000`` -> ``"Rp2.500.000"``; 0 means the driver quotes on request."""
    if not price:
        return "Hubungi untuk harga"
    return "Rp" + f"{price:,}".replace(",", ".")


def _or(value: object, placeholder: str) -> str:
    if value is None or value == "":
        return placeholder
    return str(value)


def render_listing(index: int, listing: Listing) -> str:
    return "\n".join([
        f"{index}. Nama: {_or(listing.company_name, _UNKNOWN)}",
        f"Deskripsi: {_or(listing.description, 'Tidak ada deskripsi')}",
        f"Origin: {listing.origin}",
        f"Destination: {listing.destination}",
        f"Jenis Truk: {listing.truck_type.value}",
        f"Harga: {format_rupiah(listing.price)}",
        f"Estimasi Waktu: {_or(listing.estimasi_waktu, _UNKNOWN)}",
        f"Rating: {_or(listing.rating, _UNKNOWN)}",
        f"Layanan Tambahan: {_or(listing.layanan_tambahan, _NONE)}",
        f"Website: {_or(listing.website, _NONE)}",
        f"Kontak: {_or(listing.kontak or listing.phone_number, _NONE)}",
    ])


def build_prompt(query: str, candidates: Sequence[Listing]) -> str:
    rendered = "\n\n".join(
        render_listing(i, listing) for i, listing in enumerate(candidates, start=1)
    )
    return (
        f'User is looking for: "{query}"\n'
        f"Based on their needs, I've found {len(candidates)} matching services.\n"
        "Please analyze the following options, recommend the best one "
        "(or a few if they are close) and explain why it fits:\n\n"
        f"{rendered}\n"
    )


def rank_candidates(candidates: Sequence[Listing]) -> list[Listing]:
    """Highest rating first, then cheapest. Missing ratings count as 0."""
    return sorted(candidates, key=lambda l: (-(l.rating or 0.0), l.price))


def structured_recommendation(best: Listing, total: int) -> str:
    name = best.company_name or f"Truk {best.truck_type.value}"
    rating = f"{best.rating:.1f}" if best.rating is not None else "belum ada rating"
    text = (
        f"Rekomendasi terbaik: {name} untuk rute {best.origin} ke {best.destination} "
        f"dengan truk {best.truck_type.value}, kapasitas {best.max_weight:g} kg, "
        f"harga {format_rupiah(best.price)}, rating {rating}."
    )
    if total > 1:
        text += f" Tersedia {total - 1} pilihan lain yang juga sesuai."
    return text


def compose_recommendation(
    query: str,
    candidates: Sequence[Listing],
    generator: TextGenerator,
) -> RecommendationResult:
    """
    Produce the recommendation text for ``candidates``.

    The LLM is only called when there is at least one candidate. If the call
    fails for any reason the text is built from the top-ranked candidate
    instead. ``posts`` always carries every candidate in filter order.
    """
    posts = list(candidates)
    if not posts:
        return RecommendationResult(recommendation=NO_MATCH_MESSAGE, posts=[])

    try:
        recommendation = generator.generate(build_prompt(query, posts))
    except Exception:
        logger.warning("LLM recommendation failed, falling back to rating/price ranking", exc_info=True)
        best = rank_candidates(posts)[0]
        recommendation = structured_recommendation(best, len(posts))

    return RecommendationResult(recommendation=recommendation, posts=posts)
