from sqlmodel import Session
from app.database import create_db_and_tables, engine
from app.utils.category_helpers import create_default_categories

def seed_categories():
    create_db_and_tables()
    with Session(engine) as session:
        categories = create_default_categories(session)
        for category in categories:
            print(f"✅ Categoría {category.name} ({category.type.value})")
    print("🎉 Categorías base listas.")

if __name__ == "__main__":
    seed_categories()
