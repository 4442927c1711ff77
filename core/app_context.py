from dataclasses import dataclass

from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from core.config_loader import AppConfig
from core.regenerator import MatchRegenerator, SuggestionService
from core.scorer import CompatibilityScorer
from database.database import build_engine, build_session_factory
from database.stores import SqlMatchStore, SqlProfileStore


@dataclass
class AppContext:
    """Application context container that holds all wired dependencies.

    One context per process. The stores open a fresh unit of work per
    call, so the context itself never holds a DB session.
    """
    config: AppConfig
    engine: Engine
    session_factory: sessionmaker
    profile_store: SqlProfileStore
    match_store: SqlMatchStore
    scorer: CompatibilityScorer
    regenerator: MatchRegenerator
    suggestion_service: SuggestionService

    @classmethod
    def build(cls, config: AppConfig) -> "AppContext":
        """Build an AppContext from config.

        Args:
            config: Loaded application configuration

        Returns:
            Fully wired AppContext instance
        """
        engine = build_engine(config.database.url, echo=config.database.echo)
        return cls.from_session_factory(config, engine, build_session_factory(engine))

    @classmethod
    def from_session_factory(
        cls,
        config: AppConfig,
        engine: Engine,
        session_factory: sessionmaker
    ) -> "AppContext":
        """Wire stores and services over an existing engine/session factory."""
        profile_store = SqlProfileStore(
            session_factory,
            config=config.matching,
            retry_config=config.regeneration
        )
        match_store = SqlMatchStore(session_factory, retry_config=config.regeneration)
        scorer = CompatibilityScorer(config.matching)

        return cls(
            config=config,
            engine=engine,
            session_factory=session_factory,
            profile_store=profile_store,
            match_store=match_store,
            scorer=scorer,
            regenerator=MatchRegenerator(
                profile_store, match_store, scorer=scorer, config=config.regeneration
            ),
            suggestion_service=SuggestionService(profile_store, match_store, scorer=scorer)
        )

    def dispose(self) -> None:
        self.engine.dispose()
