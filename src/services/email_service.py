"""
Serviço de email usando Resend
Documentação: https://resend.com/docs
"""
import os
import logging
from typing import Optional

import resend

from ..config import get_settings

logger = logging.getLogger(__name__)

DEFAULT_FROM_EMAIL = "Um Chamado à Edificação <cartas@umchamado.com.br>"


def _get_resend_api_key() -> Optional[str]:
    """Obtém a API key do Resend das variáveis de ambiente"""
    return os.getenv("RESEND_API_KEY")


def _get_from_email() -> str:
    return os.getenv("RESEND_FROM_EMAIL", DEFAULT_FROM_EMAIL)


def is_email_service_configured() -> bool:
    """Verifica se o serviço de email está configurado"""
    return bool(_get_resend_api_key())


def get_email_config_info() -> dict:
    return {
        "api_key_configured": bool(_get_resend_api_key()),
        "from_email": _get_from_email(),
        "configured": is_email_service_configured(),
    }


def _welcome_html(site_url: str) -> str:
    return f"""
    <!DOCTYPE html>
    <html>
    <head>
        <meta charset="utf-8">
        <meta name="viewport" content="width=device-width, initial-scale=1.0">
    </head>
    <body style="font-family: Georgia, 'Times New Roman', serif; line-height: 1.7; color: #2d2a26; max-width: 600px; margin: 0 auto; padding: 20px;">
        <div style="background: #3b2f2f; padding: 30px; border-radius: 12px 12px 0 0; text-align: center;">
            <h1 style="color: #f5efe6; margin: 0; font-size: 24px;">Um Chamado à Edificação</h1>
        </div>

        <div style="background: #ffffff; padding: 30px; border: 1px solid #e7e1d8; border-top: none; border-radius: 0 0 12px 12px;">
            <p style="font-size: 16px;">Olá!</p>

            <p>Sua inscrição foi confirmada. A partir de agora você receberá as cartas diretamente no seu email.</p>

            <p>Você também pode ler todas as cartas já publicadas no portal:</p>

            <p style="text-align: center; margin: 30px 0;">
                <a href="{site_url}" style="background: #3b2f2f; color: #f5efe6; padding: 12px 24px; border-radius: 6px; text-decoration: none;">
                    Acessar as cartas
                </a>
            </p>

            <hr style="border: none; border-top: 1px solid #e7e1d8; margin: 20px 0;">

            <p style="font-size: 12px; color: #9a9188; text-align: center;">
                Você recebeu este email porque se inscreveu em {site_url}.
            </p>
        </div>
    </body>
    </html>
    """


async def send_subscription_welcome_email(email: str) -> bool:
    """
    Envia o email de boas-vindas para uma nova inscrição.

    Args:
        email: Endereço inscrito

    Returns:
        bool: True se o email foi enviado, False caso contrário
    """
    if not is_email_service_configured():
        logger.info("Serviço de email não configurado, email de boas-vindas não será enviado")
        return False

    if not email or not email.strip():
        logger.warning("Email vazio, email de boas-vindas não será enviado")
        return False

    try:
        resend.api_key = _get_resend_api_key()

        params = {
            "from": _get_from_email(),
            "to": [email.strip()],
            "subject": "Inscrição confirmada - Um Chamado à Edificação",
            "html": _welcome_html(get_settings().site_url),
        }

        response = resend.Emails.send(params)

        logger.info(f"Email de boas-vindas enviado para {email}. ID: {response.get('id', 'N/A')}")
        return True

    except Exception as e:
        logger.error(f"Erro ao enviar email de boas-vindas: {str(e)}", exc_info=True)
        return False
