"""
OTP Message Templates
=====================
Email and SMS bodies carrying a one-time code.
"""

from string import Template

OTP_EMAIL_SUBJECT = "Your Prescripto verification code"

OTP_EMAIL_TEMPLATE = Template("""\
<html lang="en">
  <head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>OTP Verification</title>
    <style>
      body {
        font-family: Arial, sans-serif;
        margin: 0;
        padding: 0;
        background-color: #f4f4f4;
      }
      .header {
        background-color: #007BFF;
        color: white;
        padding: 20px;
        text-align: center;
      }
      .container {
        max-width: 600px;
        margin: 0 auto;
        background-color: white;
        padding: 20px;
        border-radius: 5px;
      }
      .otp-message {
        background-color: #f9f9f9;
        border: 1px solid #ddd;
        padding: 20px;
        margin: 20px 0;
        text-align: center;
        font-size: 18px;
        font-weight: bold;
        color: #333;
      }
      .footer {
        background-color: #f1f1f1;
        color: #333;
        padding: 10px;
        text-align: center;
        font-size: 14px;
        border-top: 1px solid #ddd;
      }
      .footer a {
        color: #007BFF;
        text-decoration: none;
      }
    </style>
  </head>
  <body>
    <div class="header">
      <h1>Welcome to Prescripto</h1>
    </div>
    <div class="container">
      <p>Hello,</p>
      <p>Your verification code is:</p>
      <div class="otp-message">${code}</div>
      <p>Use this code to complete your verification.</p>
    </div>
    <div class="footer">
      <p><a href="https://prescripto.einventiva.dev" target="_blank">Visit our website</a></p>
      <p>Prescripto &reg; All rights reserved.</p>
    </div>
  </body>
</html>
""")

OTP_SMS_TEMPLATE = Template(
    "Your verification code is: ${code}. Use this code to complete your verification."
)

# Shown when an email is sent without explicit content
SAMPLE_CODE = "123456"


def render_otp_email(code: str) -> str:
    """Render the OTP email body with ``code`` in the highlighted box."""
    return OTP_EMAIL_TEMPLATE.substitute(code=code)


def render_otp_sms(code: str) -> str:
    return OTP_SMS_TEMPLATE.substitute(code=code)
