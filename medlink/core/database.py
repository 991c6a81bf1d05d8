from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncEngine, AsyncSession
from sqlalchemy.orm import declarative_base
from fastapi import Request

# 建立 ORM Model 基底類別
Base = declarative_base()


def create_engine_and_sessionmaker(database_url: str, echo: bool = False):
    """
    建立非同步引擎與 Session 工廠。
    由 main.py 的 lifespan 在啟動時呼叫，並存放在 app.state 上。
    """
    engine_kwargs = {"echo": echo}
    if not database_url.startswith("sqlite"):
        # 每次從連線池取連線前，先 PING 一次，確保連線有效
        engine_kwargs["pool_pre_ping"] = True

    engine = create_async_engine(database_url, **engine_kwargs)
    session_factory = async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
    return engine, session_factory


async def create_tables(engine: AsyncEngine) -> None:
    """依照 Model 建立所有資料表 (已存在的表格會略過)"""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


# (重要) 取得 DB Session 的 Dependency
async def get_db(request: Request) -> AsyncSession:
    """FastAPI Dependency: 取得非同步資料庫 session"""
    session_factory = request.app.state.session_factory
    async with session_factory() as session:
        try:
            yield session
        finally:
            await session.close()
