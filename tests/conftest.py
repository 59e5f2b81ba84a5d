import datetime

import pytest

# Same three transactions in each serialised form
CSV_DATA = '''"date","amount","payee","description","category"
"2024-04-01",134.99,"Acme","Acme Salary April","Income"
"2024-04-02",-34.99,"Internet","INET12345678-0","Bills"
"2024-04-02",-100,"Energy","A-0A00AA00-001","Bills"'''

JSON_DATA = '''[
    {
        "date": "2024-04-01",
        "amount": 134.99,
        "payee": "Acme",
        "description": "Acme Salary April",
        "category": "Income"
    },
    {
        "date": "2024-04-02",
        "amount": -34.99,
        "payee": "Internet",
        "description": "INET12345678-0",
        "category": "Bills"
    },
    {
        "date": "2024-04-02",
        "amount": -100,
        "payee": "Energy",
        "description": "A-0A00AA00-001",
        "category": "Bills"
    }
]'''

QIF_DATA = '''
!Type:Bank
D01/04/2024
T134.99
PAcme
LIncome
MAcme Salary April
^
D02/04/2024
T-34.99
PInternet
LBills
MINET12345678-0
^
D02/04/2024
T-100
PEnergy
LBills
MA-0A00AA00-001
^'''

# A typical bank export with its own column names
BANK_EXPORT_CSV = '''Transaction Date,Value,Merchant Name,Notes,Type
15/01/2024,-12.50,Coffee Shop,Morning coffee,Food
16/01/2024,"1,200.00",Acme Ltd,Salary,Income
17/01/2024,-45.99,Energy Co,Direct debit,Bills'''


@pytest.fixture
def csv_data():
    return CSV_DATA


@pytest.fixture
def json_data():
    return JSON_DATA


@pytest.fixture
def qif_data():
    return QIF_DATA


@pytest.fixture
def bank_export_csv():
    """CSV whose headers need a field mapping."""
    return BANK_EXPORT_CSV


@pytest.fixture
def sample_transactions():
    """The normalized form of CSV_DATA, JSON_DATA and QIF_DATA."""
    from transaction_serde import Transaction

    return [
        Transaction(
            date=datetime.date(2024, 4, 1),
            amount=134.99,
            payee='Acme',
            description='Acme Salary April',
            category='Income',
        ),
        Transaction(
            date=datetime.date(2024, 4, 2),
            amount=-34.99,
            payee='Internet',
            description='INET12345678-0',
            category='Bills',
        ),
        Transaction(
            date=datetime.date(2024, 4, 2),
            amount=-100.0,
            payee='Energy',
            description='A-0A00AA00-001',
            category='Bills',
        ),
    ]


@pytest.fixture
def write_input(tmp_path):
    """Helper fixture writing input text to a temporary file."""
    def _write(text, name='input.csv'):
        path = tmp_path / name
        path.write_text(text, encoding='utf-8')
        return path
    return _write
