"""secp256k1 curve arithmetic, public and private keys, and ECDSA signatures."""