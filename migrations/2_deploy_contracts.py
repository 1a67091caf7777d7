"""
Deploy CompTest against the Kovan DAI / cDAI markets
"""

KOVAN_DAI = "0x4F96Fe3b7A6Cf9725f59d353F723c1bDb64CA6Aa"
KOVAN_CDAI = "0xf0d0eb522cfa50b716b3b1604c4f0fa6f04376ad"


def migrate(deployer):
    deployer.deploy("CompTest", KOVAN_DAI, KOVAN_CDAI)
