from pathlib import Path

from fx_ledger import FxLedger

print(FxLedger.__version__)  # 0.1.0

# Default usage keeps ~/.currencies.txt and ~/.rates.txt; point at a scratch
# directory instead so the example does not touch real data.
ledger = FxLedger(Path("example-home"))
ledger.init()

# Stored currencies in file order
for name, currency in ledger.currencies().items():
    print(name, currency.format_code, currency.rates)

# Store a couple of rates and convert
ledger.set_rate("USD", "INR", 83.2)
ledger.set_rate("INR", "USD", 0.012)
inr = ledger.convert(25_000, "USD", "INR")
print(inr, ledger.to_words(inr, "INR"))
# => 2080000.0 20.80000 lakh

# Add a currency and print the rate matrix
ledger.add_currency("JPY", "usf")
ledger.set_rate("USD", "JPY", 151.4)
print(ledger.rate_table())
