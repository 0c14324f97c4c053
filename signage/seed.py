import logging
from datetime import timedelta

from sqlalchemy.orm import Session

from signage.db import Base, SessionLocal, engine, utcnow
from signage.models.content import ContentItem
from signage.models.device import Device
from signage.models.playlist import Playlist

logger = logging.getLogger(__name__)

PLACEHOLD = "https://placehold.co/1920x1080"

CONTENT = [
    ("content-1", "image", f"{PLACEHOLD}/FF9800/3F51B5?text=Orange+Promo", 7, "Special Orange Promotion", "promotion sale"),
    ("content-2", "image", f"{PLACEHOLD}/3F51B5/FFFFFF?text=Company+News+Update", 10, "Latest Company News", "corporate announcement"),
    ("content-3", "image", f"{PLACEHOLD}/4CAF50/FFFFFF?text=New+Green+Product", 12, "Introducing Green Product", "product feature"),
    ("content-4", "image", f"{PLACEHOLD}/F44336/FFFFFF?text=Important+Red+Alert", 5, "Critical Red Alert", "important warning"),
    ("content-5", "image", f"{PLACEHOLD}/9C27B0/FFFFFF?text=Upcoming+Purple+Event", 8, "Don't Miss Purple Event", "upcoming event"),
    ("content-6", "image", f"{PLACEHOLD}/00BCD4/FFFFFF?text=Cyan+Services+Info", 10, "Our Cyan Services", "service information"),
    ("content-7", "image", f"{PLACEHOLD}/FFEB3B/000000?text=Yellow+Highlights", 9, "Yellow Highlights of the Week", "weekly summary"),
    ("content-8", "video", "https://storage.googleapis.com/gtv-videos-bucket/sample/BigBuckBunny.mp4", 30, "Big Buck Bunny Promo", "animated video"),
    ("content-9", "web", "https://example.com", 20, "Example Company Website", "web page"),
]


def seed(db: Session) -> bool:
    """Load the demo catalogue into an empty database. Returns False if data exists."""
    if db.query(ContentItem).first() or db.query(Playlist).first() or db.query(Device).first():
        logger.info("Database already has data, skipping seed")
        return False

    now = utcnow()
    for content_id, content_type, url, duration, title, hint in CONTENT:
        db.add(
            ContentItem(
                id=content_id,
                type=content_type,
                url=url,
                duration=duration,
                title=title,
                data_ai_hint=hint,
            )
        )

    db.add(
        Playlist(
            id="playlist-1",
            name="Morning Loop",
            description="Content for morning display hours. Includes news and promotions.",
            item_ids=["content-1", "content-2", "content-6", "content-8"],
            created_at=now - timedelta(hours=48),
            updated_at=now - timedelta(hours=24),
        )
    )
    db.add(
        Playlist(
            id="playlist-2",
            name="Evening Specials",
            description="Promotions and event highlights for the evening.",
            item_ids=["content-3", "content-4", "content-5", "content-7"],
            created_at=now - timedelta(hours=72),
            updated_at=now,
        )
    )

    db.add(
        Device(
            id="display-101",
            name="Lobby Screen 1 (Main Entrance)",
            status="online",
            last_seen=now,
            current_playlist_id="playlist-1",
            schedule=[
                {
                    "id": "evening-weekdays",
                    "playlist_id": "playlist-2",
                    "start_time": "17:00",
                    "end_time": "22:00",
                    "days_of_week": [1, 2, 3, 4, 5],
                }
            ],
        )
    )
    db.add(
        Device(
            id="display-102",
            name="Cafeteria Screen (East Wall)",
            status="offline",
            last_seen=now - timedelta(hours=3),
            current_playlist_id="playlist-2",
            schedule=[],
        )
    )
    db.add(
        Device(
            id="sample-display-1",
            name="Sample Demo Display",
            status="online",
            last_seen=now,
            current_playlist_id="playlist-1",
            schedule=[],
        )
    )
    db.commit()
    logger.info("Seeded %d content items, 2 playlists, 3 devices", len(CONTENT))
    return True


def main() -> None:
    logging.basicConfig(level=logging.INFO)
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        seed(db)
    finally:
        db.close()


if __name__ == "__main__":
    main()
