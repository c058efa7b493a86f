from placesearch_client.app import main

if __name__ == "__main__":
    raise SystemExit(main())
