# src/appsales/__main__.py
from appsales.app import main

if __name__ == "__main__":
    main()
