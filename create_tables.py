from dotenv import load_dotenv
load_dotenv()

from content_studio.db.base import Base
from content_studio.db.session import get_engine
from content_studio.models import *  # Import all models

print("Creating database tables...")
Base.metadata.create_all(bind=get_engine())
print("✅ All tables created successfully!")
