"""HTTP dispatcher routing calls to the live API, the backtest bridge or any URL."""
