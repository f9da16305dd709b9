"""Technical-analysis functions: moving averages, statistics, oscillators, volatility and comparison."""