"""Console front end for System Resources Control."""
