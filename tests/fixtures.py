"""
Test fixtures for calendar records and profiles
"""

import uuid

TEST_USER_ID = 'test-user-001'
TEST_CLINICIAN_ID = 'test-clinician-001'


def create_test_event(**kwargs):
    """Create a calendar record as read from the appointments table"""
    return {
        'id': kwargs.get('id', str(uuid.uuid4())),
        'title': kwargs.get('title', 'Intake Session'),
        'start': kwargs.get('start', '2025-05-01T09:00:00Z'),
        'end': kwargs.get('end', '2025-05-01T10:00:00Z'),
        'all_day': kwargs.get('all_day', False),
        'timezone': kwargs.get('timezone'),
        'extended_props': kwargs.get('extended_props', {
            'clinician_id': TEST_CLINICIAN_ID,
            'status': 'scheduled',
        }),
    }


def create_test_profile(**kwargs):
    """Create a profiles row"""
    return {
        'id': kwargs.get('id', TEST_USER_ID),
        'role': kwargs.get('role', 'clinician'),
        'time_zone': kwargs.get('time_zone', 'America/Chicago'),
    }
