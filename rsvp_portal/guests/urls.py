LOOKUP_GUEST_URL = "/api/lookup"
SUBMIT_RSVP_URL = "/api/submit"
