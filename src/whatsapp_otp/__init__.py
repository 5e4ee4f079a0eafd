"""WhatsApp OTP — one-time passcode issuance and verification over WhatsApp."""
