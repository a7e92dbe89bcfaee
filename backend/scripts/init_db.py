import sys
from pathlib import Path


def main():
    backend_dir = Path(__file__).resolve().parents[1]
    sys.path.append(str(backend_dir))

    from app.db.session import engine, init_db

    init_db(engine)
    print(f"tables created on {engine.url.render_as_string(hide_password=True)}")


if __name__ == "__main__":
    main()
