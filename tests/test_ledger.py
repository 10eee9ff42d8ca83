import unittest
from decimal import Decimal

from ledger_api.core.exceptions import InsufficientFundsError, NotFoundError, ValidationError
from ledger_api.models.transaction import TransactionKind
from ledger_api.services import ledger


class AmountParsingTests(unittest.TestCase):
    def test_parse_amount_accepts_numbers_and_numeric_strings(self):
        self.assertEqual(ledger.parse_amount(10), Decimal("10"))
        self.assertEqual(ledger.parse_amount(0.1), Decimal("0.1"))
        self.assertEqual(ledger.parse_amount(" 12.50 "), Decimal("12.50"))
        self.assertEqual(ledger.parse_amount(Decimal("3")), Decimal("3"))

    def test_parse_amount_rejects_missing_zero_negative_and_garbage(self):
        for bad in (None, "", "   ", 0, "0", -5, "-1", "abc", "12abc", True, False, [], {}, float("nan"), float("inf"), "Infinity"):
            with self.subTest(value=bad):
                with self.assertRaises(ValidationError):
                    ledger.parse_amount(bad)

    def test_parse_amount_rejects_out_of_range_and_sub_cent_values(self):
        for bad in ("1e400", 1e300, "1000000000000.01", "0.001", "0.12345678901234567891", "1.005"):
            with self.subTest(value=bad):
                with self.assertRaises(ValidationError):
                    ledger.parse_amount(bad)

    def test_parse_amount_normalizes_to_cents(self):
        self.assertEqual(str(ledger.parse_amount("5")), "5.00")
        self.assertEqual(str(ledger.parse_amount("1.50")), "1.50")
        self.assertEqual(ledger.parse_amount("1e3"), Decimal("1000"))
        self.assertEqual(ledger.parse_amount(ledger.MAX_AMOUNT), ledger.MAX_AMOUNT)

    def test_coerce_amount_rounds_and_caps(self):
        self.assertEqual(ledger.coerce_amount("10.005"), Decimal("10.01"))
        self.assertEqual(ledger.coerce_amount("1e400"), Decimal("0"))
        self.assertEqual(ledger.coerce_amount(float("inf")), Decimal("0"))

    def test_coerce_amount_falls_back_to_zero(self):
        self.assertEqual(ledger.coerce_amount("abc"), Decimal("0"))
        self.assertEqual(ledger.coerce_amount(None), Decimal("0"))
        self.assertEqual(ledger.coerce_amount(-20), Decimal("0"))
        self.assertEqual(ledger.coerce_amount("25.5"), Decimal("25.5"))


class CreateAccountTests(unittest.TestCase):
    def test_created_accounts_start_at_zero_with_unique_ids(self):
        accounts = []
        for name in ("Alice", "Bob", "Carol", "Dave", "Eve"):
            account, transaction = ledger.create_account(accounts, name)
            self.assertEqual(account.balance, Decimal("0"))
            self.assertEqual(account.name, name)
            self.assertIsNone(transaction)
        self.assertEqual(len({a.id for a in accounts}), 5)

    def test_opening_deposit_produces_one_deposit_transaction(self):
        accounts = []
        account, transaction = ledger.create_account(accounts, "Alice", 100)

        self.assertEqual(account.balance, Decimal("100"))
        self.assertIsNotNone(transaction)
        self.assertEqual(transaction.kind, TransactionKind.DEPOSIT)
        self.assertEqual(transaction.amount, Decimal("100"))
        self.assertEqual(transaction.account_id, account.id)
        self.assertEqual(accounts, [account])

    def test_unusable_opening_deposit_never_fails_creation(self):
        accounts = []
        for raw in ("lots", -50, None, "", {"x": 1}):
            with self.subTest(value=raw):
                account, transaction = ledger.create_account(accounts, "Frank", raw)
                self.assertEqual(account.balance, Decimal("0"))
                self.assertIsNone(transaction)

    def test_name_is_required(self):
        accounts = []
        for bad in (None, "", "   ", 42):
            with self.subTest(name=bad):
                with self.assertRaises(ValidationError) as ctx:
                    ledger.create_account(accounts, bad, 10)
                self.assertEqual(str(ctx.exception), "Name is required")
        self.assertEqual(accounts, [])


class MutationTests(unittest.TestCase):
    def setUp(self):
        self.accounts = []
        self.account, _ = ledger.create_account(self.accounts, "Alice", 100)

    def test_deposit_increases_balance_by_amount(self):
        for amount in (Decimal("1"), Decimal("0.25"), Decimal("1000")):
            before = self.account.balance
            balance, transaction = ledger.deposit(self.accounts, self.account.id, amount)
            self.assertEqual(balance, before + amount)
            self.assertEqual(self.account.balance, balance)
            self.assertEqual(transaction.kind, TransactionKind.DEPOSIT)
            self.assertEqual(transaction.amount, amount)

    def test_withdraw_up_to_full_balance(self):
        balance, transaction = ledger.withdraw(self.accounts, self.account.id, "40")
        self.assertEqual(balance, Decimal("60"))
        self.assertEqual(transaction.kind, TransactionKind.WITHDRAWAL)
        self.assertEqual(transaction.amount, Decimal("40"))

        balance, _ = ledger.withdraw(self.accounts, self.account.id, 60)
        self.assertEqual(balance, Decimal("0"))

    def test_deposit_past_balance_limit_is_rejected_without_change(self):
        for _ in range(9):
            ledger.deposit(self.accounts, self.account.id, ledger.MAX_AMOUNT)
        before = self.account.balance
        headroom = ledger.MAX_BALANCE - before
        self.assertLess(headroom, ledger.MAX_AMOUNT)

        with self.assertRaises(ValidationError) as ctx:
            ledger.deposit(self.accounts, self.account.id, ledger.MAX_AMOUNT)
        self.assertEqual(str(ctx.exception), "Balance limit exceeded")
        self.assertEqual(self.account.balance, before)

        balance, _ = ledger.deposit(self.accounts, self.account.id, headroom)
        self.assertEqual(balance, ledger.MAX_BALANCE)

    def test_overdraw_is_rejected_without_change(self):
        with self.assertRaises(InsufficientFundsError):
            ledger.withdraw(self.accounts, self.account.id, "100.01")
        self.assertEqual(self.account.balance, Decimal("100"))

    def test_withdraw_compares_parsed_amount(self):
        with self.assertRaises(InsufficientFundsError):
            ledger.withdraw(self.accounts, self.account.id, "900")
        balance, _ = ledger.withdraw(self.accounts, self.account.id, "9")
        self.assertEqual(balance, Decimal("91"))

    def test_unknown_account(self):
        for op in (ledger.deposit, ledger.withdraw):
            with self.subTest(op=op.__name__):
                with self.assertRaises(NotFoundError):
                    op(self.accounts, "missing", 5)
        with self.assertRaises(NotFoundError):
            ledger.get_balance(self.accounts, "missing")
        self.assertEqual(self.account.balance, Decimal("100"))

    def test_invalid_amount_checked_before_lookup(self):
        with self.assertRaises(ValidationError):
            ledger.deposit(self.accounts, "missing", 0)
        with self.assertRaises(ValidationError):
            ledger.withdraw(self.accounts, self.account.id, None)

    def test_get_balance_and_list(self):
        self.assertEqual(ledger.get_balance(self.accounts, self.account.id), ("Alice", Decimal("100")))
        listed = ledger.list_accounts(self.accounts)
        self.assertEqual([a.id for a in listed], [self.account.id])
        self.assertIsNot(listed, self.accounts)


if __name__ == "__main__":
    unittest.main()
