"""Document Catalog Service: upload, classify and search office documents."""
