"""Entry point for `python -m n8n_mcp`."""
from .main import main

if __name__ == "__main__":
    main()
