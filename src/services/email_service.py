"""
Admin alert emails using Resend API
"""

import logging
from datetime import datetime
from decimal import Decimal
import resend

from config.settings import FROM_EMAIL, RESEND_API_KEY, ADMIN_ALERT_EMAILS

logger = logging.getLogger(__name__)

async def send_direct_alert(recipient: str, subject: str, html_body: str):
    """Send a single alert email via Resend"""
    email_data = {
        "from": FROM_EMAIL,
        "to": [recipient],
        "subject": subject,
        "html": html_body
    }

    result = resend.Emails.send(email_data)
    # Extract just the ID string from the Resend response
    if hasattr(result, 'id'):
        resend_id = result.id
    elif isinstance(result, dict) and 'id' in result:
        resend_id = result['id']
    else:
        resend_id = None

    logger.info(f"Alert sent via Resend - ID: {resend_id}, To: {recipient}")
    return resend_id


async def notify_insufficient_funds(
    agent_id: str,
    payment_id: str,
    amount: Decimal,
    balance: Decimal,
    floor: Decimal
) -> int:
    """
    Email all admins that a payment could not be credited

    Delivery problems are logged, never raised.

    Returns:
        Number of alerts sent
    """
    if not RESEND_API_KEY or not FROM_EMAIL:
        logger.warning(f"Low funds alert not emailed (Resend not configured): payment {payment_id}")
        return 0

    subject = f"⚠️ Insufficient company funds to credit {agent_id}"
    html_body = f"""
    <h2>Payment Credit Refused</h2>
    <p><strong>Agent:</strong> {agent_id}</p>
    <p><strong>Payment ID:</strong> {payment_id}</p>
    <p><strong>Amount:</strong> ₹{amount}</p>
    <p><strong>Company funds:</strong> ₹{balance}</p>
    <p><strong>Required floor:</strong> ₹{floor}</p>
    <p><strong>Time:</strong> {datetime.utcnow().isoformat()}</p>
    """

    sent_count = 0
    for email in ADMIN_ALERT_EMAILS:
        try:
            await send_direct_alert(email, subject, html_body)
            sent_count += 1
        except Exception as e:
            logger.error(f"Failed to send low funds alert to {email}: {e}")

    logger.info(f"Low funds alert: payment {payment_id} - {sent_count}/{len(ADMIN_ALERT_EMAILS)} sent")
    return sent_count
