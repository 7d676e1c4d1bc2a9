from productiviflow.db import models  # noqa: F401  # Registers every table on Base.metadata
from productiviflow.db.base import Base
from productiviflow.db.session import engine

if __name__ == "__main__":
    print("Creating tables...")
    Base.metadata.create_all(bind=engine)
    print("Tables created:", ", ".join(sorted(Base.metadata.tables)))
