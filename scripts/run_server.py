"""
Run the Mano engine API locally.

Usage:
    python scripts/run_server.py
"""

import uvicorn


def main():
    print("=" * 60)
    print("  Mano Coach Engine")
    print("=" * 60)
    print()
    print("Starting server at http://localhost:8000")
    print("API docs: http://localhost:8000/docs")
    print("Press Ctrl+C to stop.")
    print()

    uvicorn.run(
        "mano.api.app:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )


if __name__ == "__main__":
    main()
