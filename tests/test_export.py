"""
Tests for smart_leave.export module.
"""


class TestLeaveBalancesCsv:
    def test_layout(self, sample_balance):
        from smart_leave.export import leave_balances_csv
        from smart_leave.models import LeaveBalance

        text = leave_balances_csv([LeaveBalance.model_validate(sample_balance)])

        assert text == (
            "Name,Sick Leave,Casual Leave,Loss of Pay,Earned Leave,Paternity Leave,Maternity Leave,Total Leaves\n"
            "Asha Patel,5,3,0,10,0,0,18\n"
        )

    def test_missing_values_are_blank(self):
        from smart_leave.export import leave_balances_csv
        from smart_leave.models import LeaveBalance

        text = leave_balances_csv([LeaveBalance(first_name="A", last_name="B")])

        assert text.splitlines()[1] == "A B,,,,,,,"

    def test_header_only_when_empty(self):
        from smart_leave.export import LEAVE_BALANCE_HEADERS, leave_balances_csv

        assert leave_balances_csv([]) == ",".join(LEAVE_BALANCE_HEADERS) + "\n"


class TestRegistrationHistoryCsv:
    def test_layout(self):
        from smart_leave.export import registration_history_csv
        from smart_leave.models import RegistrationHistory

        entry = RegistrationHistory.model_validate(
            {
                "registrationId": 7,
                "firstName": "Asha",
                "lastName": "Patel",
                "userId": 10,
                "email": "asha@corp.io",
                "role": "TEAM_MEMBER",
                "registerDate": "2024-05-01T09:30:00Z",
            }
        )

        lines = registration_history_csv([entry]).splitlines()

        assert lines[0] == "Reg. ID,First Name,Last Name,User ID,Email,Role,Registered On"
        assert lines[1] == "7,Asha,Patel,10,asha@corp.io,TEAM_MEMBER,2024-05-01 09:30:00"

    def test_format_registered_on(self):
        from smart_leave.export import format_registered_on

        assert format_registered_on(None) == ""
        assert format_registered_on("2024-05-01T09:30:00") == "2024-05-01 09:30:00"
        assert format_registered_on("yesterday") == "yesterday"


class TestUsersCsv:
    def test_layout_and_quoting(self, sample_users):
        from smart_leave.export import users_csv
        from smart_leave.models import User

        users = [User.model_validate(u) for u in sample_users]
        users[1].last_name = "Smith, Jr."

        lines = users_csv(users).splitlines()

        assert lines[0] == "ID,Name,Email,Role,Country,Gender"
        assert lines[1] == "1,Zara Khan,zara@example.com,TEAM_LEAD,India,FEMALE"
        assert lines[2] == '2,"Adam Smith, Jr.",adam@corp.io,TEAM_MEMBER,UK,MALE'

    def test_filenames(self):
        from smart_leave.export import LEAVE_BALANCES_FILENAME, REGISTRATION_HISTORY_FILENAME, USERS_FILENAME

        assert LEAVE_BALANCES_FILENAME == "admin_all_users_leave_balances.csv"
        assert REGISTRATION_HISTORY_FILENAME == "registration_history.csv"
        assert USERS_FILENAME == "user_list.csv"
