"""
SportsApp - Test Configuration and Fixtures
"""
import os
import tempfile
from typing import AsyncGenerator, Callable, Awaitable
import pytest
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.pool import NullPool
from faker import Faker

# Set testing environment
os.environ['ENVIRONMENT'] = 'testing'
os.environ['DATABASE_URL'] = 'sqlite+aiosqlite:///./test_sportsapp.db'
os.environ['SECRET_KEY'] = 'test-secret-key-for-testing-only'
os.environ['JWT_SECRET_KEY'] = 'test-jwt-secret-key-for-testing'
os.environ['ADMIN_USERNAME'] = 'admin'
os.environ['ADMIN_PASSWORD'] = 'admin-test-password'
os.environ['ADMIN_PASSWORD_HASH'] = ''
os.environ['NEWS_API_KEY'] = ''
os.environ['REDIS_URL'] = ''
os.environ['RATE_LIMIT_ENABLED'] = 'false'
os.environ['LOG_FILE'] = ''
os.environ['BCRYPT_ROUNDS'] = '4'
os.environ['UPLOAD_PATH'] = tempfile.mkdtemp(prefix='sportsapp-uploads-')

from sportsapp.main import app
from sportsapp.core.config import settings
from sportsapp.core.database import Base, get_db, enable_sqlite_foreign_keys
from sportsapp.core.security import get_password_hash, create_session_token, create_admin_token
from sportsapp.models.user import User, UserType
from sportsapp.models.drill import Drill

fake = Faker()

TEST_PASSWORD = 'testpassword123'

# Test database setup
TEST_DATABASE_URL = 'sqlite+aiosqlite:///./test_sportsapp.db'
test_engine = create_async_engine(TEST_DATABASE_URL, echo=False, poolclass=NullPool)
enable_sqlite_foreign_keys(test_engine)
TestSessionLocal = async_sessionmaker(
    bind=test_engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False
)


def session_headers(user: User) -> dict:
    """Bearer header carrying a user session token"""
    return {'Authorization': f'Bearer {create_session_token(user.id)}'}


@pytest.fixture(scope='function')
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Create a fresh database session for each test"""
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with TestSessionLocal() as session:
        yield session
        await session.rollback()

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest.fixture
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Create test client with database override"""
    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url='http://test') as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
async def admin_client(client: AsyncClient) -> AsyncGenerator[AsyncClient, None]:
    """Client holding a valid admin session cookie"""
    transport = ASGITransport(app=app)
    cookies = {settings.ADMIN_COOKIE_NAME: create_admin_token(settings.ADMIN_USERNAME)}
    async with AsyncClient(transport=transport, base_url='http://test', cookies=cookies) as ac:
        yield ac


@pytest.fixture
def make_user(db_session: AsyncSession) -> Callable[..., Awaitable[User]]:
    """Factory for persisted users"""
    async def _make_user(**overrides) -> User:
        fields = {
            'full_name': fake.name(),
            'username': f"u{fake.unique.pyint(min_value=100000, max_value=999999)}",
            'user_type': UserType.SPORTS_FAN,
            'email': fake.unique.email(),
            'phone': fake.unique.numerify('9#########'),
            'password': get_password_hash(TEST_PASSWORD),
        }
        fields.update(overrides)
        user = User(**fields)
        db_session.add(user)
        await db_session.commit()
        await db_session.refresh(user)
        return user

    return _make_user


@pytest.fixture
async def test_user(make_user) -> User:
    """Create a test user"""
    return await make_user()


@pytest.fixture
async def other_user(make_user) -> User:
    """Create a second user"""
    return await make_user(user_type=UserType.ATHLETE)


@pytest.fixture
def auth_headers(test_user: User) -> dict:
    """Generate authentication headers for test user"""
    return session_headers(test_user)


@pytest.fixture
def other_headers(other_user: User) -> dict:
    return session_headers(other_user)


@pytest.fixture
async def cricket_drills(db_session: AsyncSession) -> list:
    """Three cricket drills in the catalogue"""
    drills = [
        Drill(sport='Cricket', drill_number=number, title=f'Cricket Drill {number}')
        for number in (1, 2, 3)
    ]
    db_session.add_all(drills)
    await db_session.commit()
    return drills


@pytest.fixture
def test_user_data() -> dict:
    """Registration payload"""
    password = 'secret123'
    return {
        'full_name': fake.name(),
        'username': f"fan{fake.unique.pyint(min_value=1000, max_value=9999)}",
        'user_type': 'Sports Fan',
        'email': fake.unique.email(),
        'phone': fake.unique.numerify('8#########'),
        'password': password,
        'confirm_password': password,
    }


@pytest.fixture
def headers_for() -> Callable[[User], dict]:
    """Session headers for any user"""
    return session_headers
