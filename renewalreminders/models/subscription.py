"""
Subscription model for RenewalReminders.
Defines the Subscription class and related utilities.
"""

import datetime

from ..utils.date_utils import day_offset, parse_date, validate_date_format


class Subscription:
    """
    Class representing a recurring payment obligation owned by one user.
    """

    VALID_BILLING_CYCLES = ["monthly", "yearly"]
    VALID_STATUSES = ["active", "cancelled"]

    def __init__(self, owner_id, name, cost, billing_cycle, renewal_date,
                 currency='USD', status='active', notes=None, id=None,
                 validate_renewal_date=True):
        """
        Initialize a subscription.

        Args:
            owner_id (str): Identifier of the owning user
            name (str): Display name of the service
            cost (float): Cost per billing cycle
            billing_cycle (str): 'monthly' or 'yearly'
            renewal_date (str or datetime.date): Next renewal date
            currency (str, optional): Currency code. Defaults to 'USD'.
            status (str, optional): 'active' or 'cancelled'
            notes (str, optional): Free-text notes
            id (int, optional): Store identifier
            validate_renewal_date (bool, optional): When False the renewal date is
                kept exactly as given, so malformed stored values surface when the
                subscription is evaluated rather than when it is loaded.

        Raises:
            ValueError: If any of the validated fields are invalid
        """
        if not owner_id:
            raise ValueError("Subscription owner cannot be empty")
        self.owner_id = str(owner_id)
        self.name = name
        self.set_cost(cost)
        self.set_billing_cycle(billing_cycle)
        self.set_currency(currency)
        self.status = status
        self.notes = notes
        self.id = id

        if validate_renewal_date:
            self.set_renewal_date(renewal_date)
        else:
            self.renewal_date = renewal_date

    def __str__(self):
        return (f"{self.name} ({self.currency} {self.cost:.2f} {self.billing_cycle}, "
                f"renews: {self.renewal_date}, status: {self.status})")

    def __repr__(self):
        return f"Subscription(id={self.id!r}, owner_id={self.owner_id!r}, name={self.name!r})"

    @property
    def name(self):
        return self._name

    @name.setter
    def name(self, value):
        if not value or not str(value).strip():
            raise ValueError("Subscription name cannot be empty")
        self._name = str(value).strip()

    @property
    def status(self):
        return self._status

    @status.setter
    def status(self, value):
        if value not in self.VALID_STATUSES:
            raise ValueError(f"Status must be one of: {', '.join(self.VALID_STATUSES)}")
        self._status = value

    @property
    def is_active(self):
        return self.status == 'active'

    @property
    def annual_cost(self):
        """Calculate annual cost based on billing cycle and cost."""
        if self.billing_cycle == 'monthly':
            return self.cost * 12
        return self.cost

    def set_cost(self, cost):
        """
        Set and validate the cost.

        Raises:
            ValueError: If the cost is negative or not a number
        """
        try:
            cost_float = float(cost)
        except (ValueError, TypeError):
            raise ValueError(f"Cost must be a number, got {cost!r}")

        if cost_float < 0:
            raise ValueError("Cost cannot be negative")

        self.cost = cost_float

    def set_billing_cycle(self, billing_cycle):
        """
        Set and validate the billing cycle.

        Raises:
            ValueError: If the billing cycle is invalid
        """
        if not isinstance(billing_cycle, str) or billing_cycle.lower() not in self.VALID_BILLING_CYCLES:
            raise ValueError(
                f"Invalid billing cycle: {billing_cycle}. "
                f"Valid options are: {', '.join(self.VALID_BILLING_CYCLES)}"
            )

        self.billing_cycle = billing_cycle.lower()

    def set_currency(self, currency):
        """
        Set the currency code; empty values fall back to USD.

        Raises:
            ValueError: If the currency is not a string code
        """
        if not currency:
            currency = 'USD'
        if not isinstance(currency, str):
            raise ValueError(f"Currency must be a currency code, got {currency!r}")

        self.currency = currency.strip().upper()

    def set_renewal_date(self, renewal_date):
        """
        Set and validate the renewal date.

        Args:
            renewal_date (str or datetime.date): The renewal date in ISO format (YYYY-MM-DD)

        Raises:
            ValueError: If the renewal date format is invalid
        """
        if isinstance(renewal_date, str):
            if not validate_date_format(renewal_date):
                raise ValueError(
                    f"Invalid renewal date format: {renewal_date}. Use YYYY-MM-DD format."
                )
            self.renewal_date = renewal_date
        elif isinstance(renewal_date, datetime.date):
            self.renewal_date = parse_date(renewal_date).isoformat()
        else:
            raise ValueError(f"Invalid renewal date: {renewal_date!r}")

    def days_until_renewal(self, today):
        """
        Number of calendar days from today until the next renewal.

        Args:
            today (datetime.date): The evaluation day

        Returns:
            int: Days until renewal (negative when overdue)

        Raises:
            ValueError: If the stored renewal date cannot be parsed
        """
        return day_offset(self.renewal_date, today)

    def to_dict(self):
        """Convert the subscription to a dictionary for database storage."""
        return {
            'owner_id': self.owner_id,
            'name': self.name,
            'cost': self.cost,
            'billing_cycle': self.billing_cycle,
            'currency': self.currency,
            'renewal_date': self.renewal_date,
            'status': self.status,
            'notes': self.notes,
        }

    @classmethod
    def from_dict(cls, data):
        """
        Create a Subscription from a stored record.

        The renewal date is taken as-is; it is validated when the subscription
        is evaluated.

        Args:
            data (dict): Dictionary containing subscription data

        Returns:
            Subscription: A new Subscription instance

        Raises:
            ValueError: If a required field is missing or invalid
        """
        try:
            return cls(
                owner_id=data['owner_id'],
                name=data['name'],
                cost=data['cost'],
                billing_cycle=data['billing_cycle'],
                renewal_date=data.get('renewal_date'),
                currency=data.get('currency') or 'USD',
                status=data.get('status') or 'active',
                notes=data.get('notes'),
                id=data.get('id'),
                validate_renewal_date=False,
            )
        except KeyError as e:
            raise ValueError(f"Missing subscription field: {e.args[0]}")
