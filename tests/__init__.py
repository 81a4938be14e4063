"""
Practice Time Test Suite
Timezone normalization, calendar projection and API tests
"""
