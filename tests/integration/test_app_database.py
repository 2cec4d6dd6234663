"""Integration tests for the database the application factory binds to."""

from fastapi.testclient import TestClient
from sqlalchemy import select

from admin_backend.config import Settings
from admin_backend.domain.models.user import User
from admin_backend.infrastructure.database import build_engine, build_session_factory
from admin_backend.infrastructure.seed import seed_roles
from admin_backend.main import create_app


class TestCreateAppDatabase:
    def test_engine_follows_given_settings(self, tmp_path):
        """Should build the engine from the settings passed to create_app."""
        url = f"sqlite:///{tmp_path / 'admin.db'}"
        app = create_app(Settings(ENVIRONMENT="test", DATABASE_URL=url, _env_file=None))

        assert app.state.engine.url.database == str(tmp_path / "admin.db")
        app.state.engine.dispose()

    def test_requests_use_given_database(self, tmp_path):
        """Should persist users into the database named by the app's settings."""
        url = f"sqlite:///{tmp_path / 'admin.db'}"
        app = create_app(Settings(ENVIRONMENT="test", DATABASE_URL=url, _env_file=None))

        with TestClient(app) as client:
            db = app.state.session_factory()
            try:
                seed_roles(db)
            finally:
                db.close()

            response = client.post("/v1/user/create", json={"phone": "13800138000"})
            assert response.status_code == 201

        engine = build_engine(url)
        db = build_session_factory(engine)()
        try:
            phones = db.scalars(select(User.phone)).all()
        finally:
            db.close()
            engine.dispose()
        assert phones == ["13800138000"]
