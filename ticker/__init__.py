"""Dev ticker: mock CoinMarketCap/CoinGecko price server for local development."""
