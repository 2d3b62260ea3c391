from sqlalchemy.orm import declarative_base

# Declarative base shared by all models
Base = declarative_base()
