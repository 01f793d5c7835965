"""Tim Sach Nha Be bookstore API."""
