"""
Обратный резолвинг (PTR) через dnspython.

Без RDNS_NAMESERVERS берется системная конфигурация (/etc/resolv.conf).
"""
import logging
from typing import List, Optional, Sequence

import dns.resolver
import dns.reversename

from rdns_filter.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


def build_resolver(nameservers: Optional[Sequence[str]] = None,
                   timeout: Optional[float] = None) -> dns.resolver.Resolver:
    """Создает резолвер, общий для всех воркеров"""
    try:
        resolver = dns.resolver.Resolver(configure=not nameservers)
        if nameservers:
            resolver.nameservers = list(nameservers)
    except dns.resolver.NoResolverConfiguration as ex:
        raise ConfigurationError(f"No DNS resolver configuration: {ex}") from ex
    except ValueError as ex:
        raise ConfigurationError(f"Invalid RDNS_NAMESERVERS: {ex}") from ex

    if timeout is not None:
        # lifetime ограничивает весь запрос целиком, вместе с повторами по серверам
        resolver.timeout = timeout
        resolver.lifetime = timeout

    logger.debug("Резолвер: nameservers=%s lifetime=%s", resolver.nameservers, resolver.lifetime)
    return resolver


def lookup_addr(ip: str, resolver: dns.resolver.Resolver) -> List[str]:
    """
    Возвращает имена из PTR-записей для IP в абсолютной форме, с точкой в конце (dns.google.).
    Любая ошибка DNS (NXDOMAIN, NoAnswer, таймаут, кривой адрес) - dns.exception.DNSException.
    """
    rev_name = dns.reversename.from_address(ip)
    answers = resolver.resolve(rev_name, "PTR")
    return [str(rdata.target) for rdata in answers]
