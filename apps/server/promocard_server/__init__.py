"""HTTP service and command line for promo card rendering."""
