import attrs


@attrs.define(frozen=True)
class PaymentAmount:
    """A cash/transfer pair of whole-currency amounts, signed when used as a delta"""

    cash: int = 0
    transfer: int = 0

    @property
    def total(self) -> int:
        return self.cash + self.transfer

    @property
    def is_zero(self) -> bool:
        return self.cash == 0 and self.transfer == 0

    def __add__(self, other: 'PaymentAmount') -> 'PaymentAmount':
        return PaymentAmount(cash=self.cash + other.cash, transfer=self.transfer + other.transfer)

    def __sub__(self, other: 'PaymentAmount') -> 'PaymentAmount':
        return PaymentAmount(cash=self.cash - other.cash, transfer=self.transfer - other.transfer)

    def __neg__(self) -> 'PaymentAmount':
        return PaymentAmount(cash=-self.cash, transfer=-self.transfer)
