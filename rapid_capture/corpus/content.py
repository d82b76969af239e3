"""Authored scenario content. Four scenarios per (difficulty, label) bucket."""

SCENARIOS = [
    # ---------- easy / phishing ----------
    {
        "id": "easy-phish-1",
        "difficulty": "easy",
        "correct_label": "phishing",
        "title": "Password Expiry Panic",
        "content": {
            "type": "email",
            "from_address": "security@amaz0n-verify.com",
            "to_address": "you@company.com",
            "subject": "PASSWORD EXPIRES IN 2 HOURS!!!",
            "body": (
                "URGENT: your password is about to expire!\n\n"
                "Reset it right now: https://amaz0n-verify.com/reset\n\n"
                "Accounts that are not reset today will be LOCKED.\n\nAmazon Security"
            ),
        },
        "explanation": "Lookalike domain (a zero instead of an o), shouting urgency and a threat of lockout.",
        "red_flags": [
            "Domain swaps the letter o for a zero",
            "Extreme urgency and threats",
            "Link points outside amazon.com",
        ],
        "analysis_hints": {
            "threat_level": "high",
            "attack_vector": "Credential harvesting",
            "targeted_assets": ["Email credentials"],
        },
    },
    {
        "id": "easy-phish-2",
        "difficulty": "easy",
        "correct_label": "phishing",
        "title": "Lottery Winner Text",
        "content": {
            "type": "sms",
            "sender": "+1-555-WINNER",
            "message": "CONGRATS!!! You won $1,000,000! Claim before midnight: bit.ly/cl4im-n0w",
        },
        "explanation": "You cannot win a draw you never entered, and the shortened link hides the destination.",
        "red_flags": ["Unsolicited prize", "Shortened link", "Deadline pressure"],
        "analysis_hints": {"threat_level": "high", "attack_vector": "Advance fee fraud"},
    },
    {
        "id": "easy-phish-3",
        "difficulty": "easy",
        "correct_label": "phishing",
        "title": "Free Wi-Fi Flyer",
        "content": {
            "type": "qrcode",
            "qr_context": "Handwritten flyer taped to a cafe wall: SCAN FOR FREE PREMIUM WIFI",
            "qr_destination": "A form asking for your email and card number 'for verification'",
            "location": "Coffee shop",
        },
        "explanation": "Free Wi-Fi never needs a card number; the flyer is not from the venue.",
        "red_flags": ["Card details requested for free service", "Unofficial handwritten flyer"],
        "analysis_hints": {"threat_level": "high", "attack_vector": "Credential harvesting via QR"},
    },
    {
        "id": "easy-phish-4",
        "difficulty": "easy",
        "correct_label": "phishing",
        "title": "847 Viruses Detected",
        "content": {
            "type": "ransomware",
            "title": "YOUR COMPUTER IS INFECTED!!!",
            "message": "847 viruses found! Call Microsoft Support NOW at 1-888-555-0199 before your files are erased!",
            "variant": "tech_support",
            "phone_number": "1-888-555-0199",
        },
        "explanation": "Operating system vendors do not show browser popups asking you to phone them.",
        "red_flags": ["Popup demands a phone call", "Impossible virus count", "Scare tactics"],
        "analysis_hints": {"threat_level": "medium", "attack_vector": "Tech support scam"},
    },
    # ---------- easy / legitimate ----------
    {
        "id": "easy-legit-1",
        "difficulty": "easy",
        "correct_label": "legitimate",
        "title": "Order Confirmation",
        "content": {
            "type": "email",
            "from_address": "auto-confirm@amazon.com",
            "to_address": "you@email.com",
            "subject": "Your Amazon.com order #112-4847291-8472910",
            "body": (
                "Hello,\n\nThanks for your order.\n\nItem: Wireless mouse\nTotal: $24.99\n\n"
                "Track it any time at amazon.com/orders.\n\nAmazon.com"
            ),
            "task_action": "Track order",
        },
        "explanation": "Sent from the official domain about an order you placed, with no pressure.",
        "trust_indicators": ["Official amazon.com sender", "Specific order details", "No urgency"],
        "analysis_hints": {"threat_level": "low", "attack_vector": "None"},
    },
    {
        "id": "easy-legit-2",
        "difficulty": "easy",
        "correct_label": "legitimate",
        "title": "Appointment Reminder",
        "content": {
            "type": "sms",
            "sender": "74839 (HealthCare)",
            "message": "Reminder: Dr. Smith tomorrow 10:30 AM, Main Street Clinic. Reply C to confirm.",
            "task_action": "Confirm",
        },
        "explanation": "An expected reminder from a provider you use, with no link and no payment request.",
        "trust_indicators": ["Expected appointment", "Named clinic and doctor", "No links"],
        "analysis_hints": {"threat_level": "low"},
    },
    {
        "id": "easy-legit-3",
        "difficulty": "easy",
        "correct_label": "legitimate",
        "title": "Restaurant Menu Code",
        "content": {
            "type": "qrcode",
            "qr_context": "Printed table card with the restaurant's logo: Scan for menu",
            "qr_destination": "The restaurant's own website menu page",
            "location": "Restaurant table",
        },
        "explanation": "Professionally printed by the venue and it asks for nothing personal.",
        "trust_indicators": ["Venue branding", "Official website", "No data requested"],
        "analysis_hints": {"threat_level": "low"},
    },
    {
        "id": "easy-legit-4",
        "difficulty": "easy",
        "correct_label": "legitimate",
        "title": "Friend's Holiday Post",
        "content": {
            "type": "social",
            "platform": "Facebook",
            "username": "john.smith.84",
            "display_name": "John Smith",
            "post": "Back from Hawaii! The sunsets were unreal. Already planning the next trip.",
        },
        "explanation": "A friend sharing personal news with no links or requests.",
        "trust_indicators": ["Known friend", "No links", "Ordinary personal content"],
        "analysis_hints": {"threat_level": "low"},
    },
    # ---------- medium / phishing ----------
    {
        "id": "med-phish-1",
        "difficulty": "medium",
        "correct_label": "phishing",
        "title": "Shared Document Notice",
        "content": {
            "type": "email",
            "from_address": "no-reply@google-docs-share.net",
            "to_address": "you@company.com",
            "subject": "Q3 budget review has been shared with you",
            "body": (
                "Sarah from Finance shared a document with you.\n\n"
                "Open in Docs: https://google-docs-share.net/d/q3-budget\n\n"
                "Please review before Friday's meeting."
            ),
        },
        "explanation": "Looks like a Google share notice but comes from google-docs-share.net.",
        "red_flags": ["Sender domain is not google.com", "Link leads to the same fake domain"],
        "analysis_hints": {"threat_level": "high", "attack_vector": "Credential harvesting"},
    },
    {
        "id": "med-phish-2",
        "difficulty": "medium",
        "correct_label": "phishing",
        "title": "Bank Fraud Department Call",
        "content": {
            "type": "voice",
            "caller_number": "+1-800-555-0134",
            "caller_name": "Chase Fraud Dept",
            "transcript": (
                "We've flagged a $900 purchase on your card. To block it, "
                "please read me the one-time code we just texted you."
            ),
        },
        "explanation": "Banks never ask you to read back a one-time code; that code authorises the thief.",
        "red_flags": ["Asks for a one-time passcode", "Caller ID can be spoofed", "Manufactured urgency"],
        "analysis_hints": {"threat_level": "critical", "attack_vector": "Vishing"},
    },
    {
        "id": "med-phish-3",
        "difficulty": "medium",
        "correct_label": "phishing",
        "title": "Microsoft 365 Portal",
        "content": {
            "type": "website",
            "url": "https://microsoft365-portal.com/login",
            "website_title": "Sign in to your account",
            "website_content": "Your session has expired. Sign in again to continue to Outlook.",
            "brand_name": "Microsoft",
            "has_login_form": True,
        },
        "explanation": "Real Microsoft sign-in lives on login.microsoftonline.com, not microsoft365-portal.com.",
        "red_flags": ["Unofficial domain", "Unexpected re-authentication prompt"],
        "analysis_hints": {"threat_level": "critical", "attack_vector": "Credential theft"},
    },
    {
        "id": "med-phish-4",
        "difficulty": "medium",
        "correct_label": "phishing",
        "title": "Recruiter Direct Message",
        "content": {
            "type": "social",
            "platform": "LinkedIn",
            "username": "talent-partner-hr",
            "display_name": "Emma Clarke, Talent Partner",
            "post": "Loved your profile! Remote role, $140k. Fill in the pre-screen here: jobs-apply-now.co/form",
            "verified": False,
        },
        "explanation": "Unverified recruiter pushing an off-platform form that collects personal data.",
        "red_flags": ["Unverified account", "Too-good salary", "External form link"],
        "analysis_hints": {"threat_level": "medium", "attack_vector": "Identity theft"},
    },
    # ---------- medium / legitimate ----------
    {
        "id": "med-legit-1",
        "difficulty": "medium",
        "correct_label": "legitimate",
        "title": "Two-Factor Code You Requested",
        "content": {
            "type": "sms",
            "sender": "22000",
            "message": "Your GitHub verification code is 482913. It expires in 10 minutes.",
            "task_action": "Enter code",
        },
        "explanation": "You just signed in and asked for this code; it contains no link or request.",
        "trust_indicators": ["Expected after your own sign-in", "No link", "Short code sender"],
        "analysis_hints": {"threat_level": "low"},
    },
    {
        "id": "med-legit-2",
        "difficulty": "medium",
        "correct_label": "legitimate",
        "title": "IT Maintenance Window",
        "content": {
            "type": "email",
            "from_address": "it-helpdesk@company.com",
            "to_address": "you@company.com",
            "subject": "Scheduled VPN maintenance Saturday 02:00-04:00",
            "body": (
                "Hi all,\n\nThe VPN will be unavailable Saturday 02:00-04:00 for upgrades.\n"
                "No action is needed. Questions go to the usual helpdesk portal.\n\nIT Helpdesk"
            ),
        },
        "explanation": "Internal sender, informational only, and it asks you to do nothing.",
        "trust_indicators": ["Internal domain", "No links or credentials requested"],
        "analysis_hints": {"threat_level": "low"},
    },
    {
        "id": "med-legit-3",
        "difficulty": "medium",
        "correct_label": "legitimate",
        "title": "Pharmacy Callback",
        "content": {
            "type": "voice",
            "caller_number": "+1-555-201-4400",
            "caller_name": "Main St Pharmacy",
            "transcript": "Hi, your prescription is ready for pickup. We're open until 8 tonight.",
        },
        "explanation": "A routine notice from a pharmacy you use that asks for no information.",
        "trust_indicators": ["Known local business", "No personal data requested"],
        "analysis_hints": {"threat_level": "low"},
    },
    {
        "id": "med-legit-4",
        "difficulty": "medium",
        "correct_label": "legitimate",
        "title": "Parking Meter Code",
        "content": {
            "type": "qrcode",
            "qr_context": "QR code engraved into the city parking meter housing, next to the city seal",
            "qr_destination": "The city's official parking payment app page",
            "location": "Street parking",
        },
        "explanation": "Built into the meter itself rather than stuck on top, and it leads to the city's own site.",
        "trust_indicators": ["Part of the meter, not a sticker", "Official city domain"],
        "analysis_hints": {"threat_level": "low"},
    },
    # ---------- hard / phishing ----------
    {
        "id": "hard-phish-1",
        "difficulty": "hard",
        "correct_label": "phishing",
        "title": "Vendor Bank Details Update",
        "content": {
            "type": "email",
            "from_address": "accounts@acme-supplies.co",
            "to_address": "you@company.com",
            "subject": "Re: Invoice 20931 - updated remittance details",
            "body": (
                "Hi,\n\nFollowing up on our discussion. We have moved banks, so please use the "
                "attached details for invoice 20931 and future payments.\n\nKind regards,\nDaniel"
            ),
            "has_attachment": True,
            "attachment_name": "New_Remittance_Details.pdf",
        },
        "explanation": "Business email compromise: the real vendor uses acme-supplies.com, and bank changes must be verified by phone.",
        "red_flags": ["Domain differs by one TLD", "Change of bank details", "Calm tone hiding fraud"],
        "analysis_hints": {
            "threat_level": "critical",
            "attack_vector": "Business email compromise",
            "real_world_impact": "Invoice payments silently redirected to the attacker's account.",
        },
    },
    {
        "id": "hard-phish-2",
        "difficulty": "hard",
        "correct_label": "phishing",
        "title": "Nested Subdomain Login",
        "content": {
            "type": "website",
            "url": "https://login.microsoft.com.auth-portal.net/oauth",
            "website_title": "Sign in - Microsoft",
            "website_content": "Pixel-perfect copy of the Microsoft sign-in page.",
            "brand_name": "Microsoft",
            "has_login_form": True,
        },
        "explanation": "The registered domain is auth-portal.net; microsoft.com is only a subdomain label.",
        "red_flags": ["Real domain is at the end of the hostname", "Perfect visual clone"],
        "analysis_hints": {"threat_level": "critical", "attack_vector": "Credential theft"},
    },
    {
        "id": "hard-phish-3",
        "difficulty": "hard",
        "correct_label": "phishing",
        "title": "Files Encrypted",
        "content": {
            "type": "ransomware",
            "title": "Your files are encrypted",
            "message": "All documents on this device have been encrypted. Pay to receive the decryption key.",
            "variant": "ransomware",
            "demand_amount": "0.5",
            "cryptocurrency": "BTC",
            "countdown": 259200,
        },
        "explanation": "Paying funds criminals and rarely restores data; disconnect and report to IT.",
        "red_flags": ["Crypto ransom demand", "Countdown pressure"],
        "analysis_hints": {"threat_level": "critical", "attack_vector": "Ransomware"},
    },
    {
        "id": "hard-phish-4",
        "difficulty": "hard",
        "correct_label": "phishing",
        "title": "CEO Voice Request",
        "content": {
            "type": "voice",
            "caller_number": "+44-20-7946-0321",
            "caller_name": "Unknown",
            "transcript": (
                "It's Michael. I'm boarding, so keep this quiet: I need three $500 gift cards "
                "for a client before noon. Text me the codes."
            ),
        },
        "explanation": "Executives do not buy gift cards through staff in secret; this is a classic pretext.",
        "red_flags": ["Secrecy", "Gift card request", "Unknown number"],
        "analysis_hints": {"threat_level": "high", "attack_vector": "CEO fraud"},
    },
    # ---------- hard / legitimate ----------
    {
        "id": "hard-legit-1",
        "difficulty": "hard",
        "correct_label": "legitimate",
        "title": "Unusual Sign-in Alert",
        "content": {
            "type": "email",
            "from_address": "no-reply@accounts.google.com",
            "to_address": "you@gmail.com",
            "subject": "Security alert",
            "body": (
                "A new sign-in on Windows.\n\nIf this was you, you don't need to do anything. "
                "If not, check activity at myaccount.google.com/notifications."
            ),
            "task_action": "Check activity",
        },
        "explanation": "Genuine Google alert: official sender, no request for credentials, points to myaccount.google.com.",
        "trust_indicators": ["accounts.google.com sender", "No credentials requested", "Official destination"],
        "analysis_hints": {"threat_level": "low"},
    },
    {
        "id": "hard-legit-2",
        "difficulty": "hard",
        "correct_label": "legitimate",
        "title": "Company SSO Page",
        "content": {
            "type": "website",
            "url": "https://company.okta.com/app/login",
            "website_title": "Company - Sign In",
            "website_content": "Your organisation's single sign-on page, reached from the intranet bookmark.",
            "brand_name": "Okta",
            "has_login_form": True,
        },
        "explanation": "The expected identity provider tenant, reached from your own bookmark.",
        "trust_indicators": ["Known SSO tenant", "Reached from bookmark"],
        "analysis_hints": {"threat_level": "low"},
    },
    {
        "id": "hard-legit-3",
        "difficulty": "hard",
        "correct_label": "legitimate",
        "title": "OS Update Notice",
        "content": {
            "type": "ransomware",
            "title": "Updates are ready",
            "message": "Windows will restart to install updates outside your active hours.",
            "variant": "fake_alert",
        },
        "explanation": "A normal system notification that asks for no payment and no phone call.",
        "trust_indicators": ["System notification area", "No payment or contact request"],
        "analysis_hints": {"threat_level": "low"},
    },
    {
        "id": "hard-legit-4",
        "difficulty": "hard",
        "correct_label": "legitimate",
        "title": "Verified Brand Announcement",
        "content": {
            "type": "social",
            "platform": "Twitter/X",
            "username": "Spotify",
            "display_name": "Spotify",
            "post": "Wrapped is here. Open the app to see your year in music.",
            "verified": True,
        },
        "explanation": "Verified official account pointing you to the app you already have.",
        "trust_indicators": ["Verified account", "No external links", "Seasonal, expected content"],
        "analysis_hints": {"threat_level": "low"},
    },
]
