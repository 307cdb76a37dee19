import os
import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

# ------------------------------------------------------------------
# FORCE TESTING CONFIG
# Must be set BEFORE importing app.main so Settings() and the engine
# pick these values up.
# ------------------------------------------------------------------
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["RECAPTCHA_SECRET_KEY"] = "test-secret-key"
os.environ["RECAPTCHA_SITE_KEY"] = "test-site-key"
os.environ["SHEETS_WEBHOOK_URL"] = "https://sheets.example.test/exec"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ.pop("RECAPTCHA_RELAY_BASE_URL", None)
os.environ.pop("REDIS_URL", None)

from app.main import app
from app.core.database import AsyncSessionLocal, engine, init_db
from app.models.enums import VolunteeredChoice
from app.schemas.volunteer import VolunteerForm
from app.core.constants import COMMITTEES, GOVERNORATES


@pytest_asyncio.fixture
async def client():
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as ac:
        yield ac


@pytest_asyncio.fixture
async def db_session():
    """Fresh in-memory database per test."""
    await init_db()
    async with AsyncSessionLocal() as session:
        yield session
    # StaticPool: disposing drops the single :memory: connection
    await engine.dispose()


@pytest.fixture
def valid_form() -> VolunteerForm:
    return VolunteerForm(
        full_name="أحمد محمد علي حسن",
        mobile="01012345678",
        email="ahmed.hassan@example.com",
        college="الهندسة",
        university="جامعة القاهرة",
        year="الثالثة",
        governorate=GOVERNORATES[0],
        committee=COMMITTEES[1],
        has_volunteered=VolunteeredChoice.No,
        volunteer_history="",
        accept_terms=True,
    )


@pytest.fixture
def valid_post_data() -> dict:
    return {
        "formSession": "session-e2e",
        "fullName": "منى سامي عبد الله محمود",
        "mobile": "01598765432",
        "email": "mona.sami@example.org",
        "college": "التجارة",
        "university": "جامعة عين شمس",
        "year": "الأولى",
        "governorate": GOVERNORATES[2],
        "committee": COMMITTEES[3],
        "hasVolunteered": VolunteeredChoice.Yes.value,
        "volunteerHistory": "تنظيم ماراثون الشباب 2023",
        "acceptTerms": "on",
        "g-recaptcha-response": "widget-token",
    }
