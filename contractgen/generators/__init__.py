"""Target-language contract writers and the batch driver that runs them."""
