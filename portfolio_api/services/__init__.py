"""services/: adapters to systems outside this process."""
